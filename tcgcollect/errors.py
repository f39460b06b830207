"""
Error types and their JSON responses
"""
from flask import has_request_context, jsonify, request
from loguru import logger
from werkzeug.exceptions import HTTPException


class ApiError(Exception):
    """Base class for errors that map to an HTTP status"""
    status_code = 500
    default_message = 'Internal server error'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class ValidationError(ApiError):
    """Bad, missing or out-of-range input"""
    status_code = 400
    default_message = 'Invalid request'


class ConflictError(ValidationError):
    """A write collided with a uniqueness constraint"""
    default_message = 'Record already exists'


class AuthError(ApiError):
    """Missing or invalid caller identity"""
    status_code = 401
    default_message = 'Unauthorized'


class NotFoundError(ApiError):
    """Referenced entity does not exist"""
    status_code = 404
    default_message = 'Not found'


class UnsupportedMethodError(ApiError):
    status_code = 405
    default_message = 'Method not allowed'


class StoreError(ApiError):
    """The database failed; never retried"""
    status_code = 500
    default_message = 'Database error'


def error_response(message, status_code):
    return jsonify({'error': message}), status_code


def register_error_handlers(app):
    """Map every error kind to {"error": message} with its status code"""

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        if error.status_code >= 500:
            logger.opt(exception=error).error(f'{request_label()} failed: {error.message}')
        return error_response(error.message, error.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        if error.code == 405:
            return error_response(UnsupportedMethodError.default_message, 405)
        if error.code == 404:
            return error_response(NotFoundError.default_message, 404)
        return error_response(error.description or error.name, error.code)

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        logger.exception(f'{request_label()} crashed: {error}')
        return error_response(ApiError.default_message, 500)


def request_label():
    if not has_request_context():
        return 'request'
    return f'{request.method} {request.path}'
