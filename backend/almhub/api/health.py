"""Health check endpoint."""

from http import HTTPStatus

from flask import Blueprint, jsonify
from sqlalchemy import text

from ..extensions import db

bp = Blueprint("health", __name__)


@bp.get("/health")
def health() -> tuple[object, int]:
    """Return the service health status, including database reachability."""
    db.session.execute(text("SELECT 1"))
    return jsonify({"status": "ok"}), HTTPStatus.OK
