"""Map domain exceptions onto JSON error responses."""

from __future__ import annotations

import logging
from http import HTTPStatus

from flask import Flask, jsonify
from flask.wrappers import Response

from ..exceptions import (
    AuthenticationException,
    AuthorizationException,
    BusinessLogicException,
    RecordExistsException,
    RecordNotFoundException,
    ValidationException,
)

logger = logging.getLogger(__name__)

# Checked in order, so subclasses must come before their bases.
_STATUS_BY_EXCEPTION: tuple[tuple[type[BusinessLogicException], HTTPStatus], ...] = (
    (AuthenticationException, HTTPStatus.UNAUTHORIZED),
    (AuthorizationException, HTTPStatus.FORBIDDEN),
    (RecordNotFoundException, HTTPStatus.NOT_FOUND),
    (RecordExistsException, HTTPStatus.BAD_REQUEST),
    (ValidationException, HTTPStatus.BAD_REQUEST),
)


def status_for(exc: BusinessLogicException) -> HTTPStatus:
    """Return the HTTP status used to report ``exc``."""

    for exc_type, status in _STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            return status
    return HTTPStatus.BAD_REQUEST


def _handle_business_logic_error(exc: BusinessLogicException) -> tuple[Response, int]:
    status = status_for(exc)
    logger.info("Request rejected with %s (%s): %s", int(status), exc.error_code, exc.message)

    response = jsonify({"error": exc.message, "code": exc.error_code})
    if status == HTTPStatus.UNAUTHORIZED:
        response.headers["WWW-Authenticate"] = "Bearer"
    return response, status


def register_error_handlers(app: Flask) -> None:
    """Install the domain exception handlers on ``app``."""

    app.register_error_handler(BusinessLogicException, _handle_business_logic_error)
