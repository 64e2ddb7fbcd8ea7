"""
API Errors
Typed failures raised by routes and rendered by the app-level handlers
"""

from __future__ import annotations
from typing import List, Optional

from flask import Flask, jsonify
from pymongo.errors import DuplicateKeyError
from werkzeug.exceptions import HTTPException


class ApiError(Exception):
    """Base class for errors that map to an HTTP response"""
    status_code = 500
    message = 'Internal server error'

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message or self.message)
        if message:
            self.message = message
        if status_code:
            self.status_code = status_code

    def to_dict(self) -> dict:
        return {'ok': False, 'error': self.message}


class ValidationError(ApiError):
    status_code = 400
    message = 'Validation failed'

    def __init__(self, message: Optional[str] = None, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []

    def to_dict(self) -> dict:
        data = super().to_dict()
        if self.errors:
            data['errors'] = self.errors
        return data


class Unauthenticated(ApiError):
    status_code = 401
    message = 'Not authorized'


class Forbidden(ApiError):
    status_code = 403
    message = 'Forbidden'


class Conflict(ApiError):
    status_code = 409
    message = 'Resource already exists'


class NotFound(ApiError):
    status_code = 404
    message = 'Not found'


class Internal(ApiError):
    status_code = 500


class ServiceUnavailable(ApiError):
    status_code = 503
    message = 'Database not available'


def register_error_handlers(app: Flask) -> None:
    """Render ApiError subclasses as {'ok': False, 'error': ...} responses"""

    @app.errorhandler(ApiError)
    def handle_api_error(error: ApiError):
        if error.status_code == 500:
            # Detail stays in the log, the client gets the generic message
            app.logger.error("Internal error: %s", error, exc_info=error.__cause__)
            return jsonify(Internal().to_dict()), 500
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(DuplicateKeyError)
    def handle_duplicate_key(error: DuplicateKeyError):
        app.logger.warning("Duplicate key: %s", error)
        return jsonify(Conflict().to_dict()), Conflict.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        return jsonify({'ok': False, 'error': error.name}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        app.logger.exception("Unhandled error: %s", error)
        return jsonify(Internal().to_dict()), 500
