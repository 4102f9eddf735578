from __future__ import annotations

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .core.exceptions import DomainError

logger = logging.getLogger(__name__)


def register(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(err: DomainError):
        level = logging.ERROR if err.http_status >= 500 else logging.WARNING
        logger.log(level, "%s %s: %s", err.http_status, err.code, err.message)
        return jsonify(err.to_dict()), err.http_status

    @app.errorhandler(HTTPException)
    def handle_http_error(err: HTTPException):
        return jsonify({"message": err.description, "code": err.name.replace(" ", "")}), err.code

    @app.errorhandler(Exception)
    def handle_unexpected(err: Exception):
        logger.exception("unhandled error")
        return jsonify({"message": "Internal server error", "code": "InternalError"}), 500
