# flatdesk/errors.py
import logging

from flask import jsonify, request
from werkzeug.exceptions import HTTPException

from .extensions import db

logger = logging.getLogger(__name__)

_ERROR_CODES = {
    400: "bad_request",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
    413: "payload_too_large",
    422: "unprocessable",
    500: "server_error",
}


class ApiError(Exception):
    """An error that maps straight onto a JSON response."""

    def __init__(self, status, message, error=None):
        super().__init__(message)
        self.status = status
        self.message = message
        self.error = error or _ERROR_CODES.get(status, "error")

    def to_response(self):
        return jsonify({"error": self.error, "message": self.message}), self.status


def validation_error(message):
    return jsonify({"error": "validation_error", "message": message}), 400


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def api_error(e):
        return e.to_response()

    @app.errorhandler(413)
    def too_large(e):
        return jsonify(error="payload_too_large", message="Upload too large"), 413

    @app.errorhandler(HTTPException)
    def http_error(e):
        code = e.code or 500
        return jsonify(
            error=_ERROR_CODES.get(code, "error"),
            message=e.description,
            path=request.path,
        ), code

    @app.errorhandler(Exception)
    def server_error(e):
        db.session.rollback()
        logger.exception("Unhandled exception on %s %s", request.method, request.path)
        return jsonify(error="server_error", message=str(e)), 500
