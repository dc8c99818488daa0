"""Declarative request parameters with presence and length checks."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from ..exceptions import InvalidParameterException, MissingParameterException


@dataclass(frozen=True)
class Param:
    """A form/query parameter accepted by an action."""

    name: str
    max_length: int
    required: bool = True
    description: str = ""


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def read_param(param: Param, values: Mapping[str, str]) -> str | None:
    """Return the raw value of ``param``, enforcing presence and length.

    Empty strings are treated as absent, both for mandatory and optional
    parameters.
    """

    value = values.get(param.name)
    if value is None or value == "":
        if param.required:
            raise MissingParameterException(param.name)
        return None

    if len(value) > param.max_length:
        raise InvalidParameterException(param.name, len(value), param.max_length)
    return value


def read_params(params: Iterable[Param], values: Mapping[str, str]) -> dict[str, str | None]:
    """Read every parameter in declaration order, failing on the first invalid one."""

    return {param.name: read_param(param, values) for param in params}
