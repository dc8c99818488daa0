"""Bootstrap an administrator API token and, optionally, a GitHub ALM setting."""
from __future__ import annotations

import argparse
import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.almhub import create_app
from backend.almhub.extensions import db
from backend.almhub.models.alm_setting import ALM_GITHUB, AlmSetting
from backend.almhub.models.auth import ROLE_ADMIN, ApiToken
from backend.almhub.utils.auth import generate_token, hash_token


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--token-name", default="Bootstrap Admin Token")
    parser.add_argument("--github-key", help="key of the GitHub ALM setting to create")
    parser.add_argument("--github-url", default="https://api.github.com")
    parser.add_argument("--github-app-id", default="")
    parser.add_argument("--github-private-key-file", type=pathlib.Path)
    return parser.parse_args(argv)


def _create_admin_token(name: str) -> str:
    plaintext = generate_token()
    db.session.add(ApiToken(name=name, role=ROLE_ADMIN, token_hash=hash_token(plaintext)))
    return plaintext


def _ensure_github_setting(args: argparse.Namespace) -> bool:
    """Create the GitHub setting unless a setting already uses the key."""

    if AlmSetting.query.filter_by(key=args.github_key).first() is not None:
        return False

    private_key = ""
    if args.github_private_key_file is not None:
        private_key = args.github_private_key_file.read_text(encoding="utf-8")

    db.session.add(
        AlmSetting(
            key=args.github_key,
            alm=ALM_GITHUB,
            url=args.github_url,
            app_id=args.github_app_id,
            private_key=private_key,
        )
    )
    return True


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    app = create_app()
    with app.app_context():
        token = _create_admin_token(args.token_name)
        created_setting = False
        if args.github_key:
            created_setting = _ensure_github_setting(args)
        db.session.commit()

        print(
            "Seed completed",
            f"admin token={token}",
            f"github setting created={int(created_setting)}",
        )


if __name__ == "__main__":
    main()
