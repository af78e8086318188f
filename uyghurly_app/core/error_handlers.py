"""
Error types and JSON error responses for the Uyghurly API.

Every expected failure is a ``UyghurlyError`` subclass that carries its own
HTTP status and machine code; the handlers below turn it into
``{"success": false, "message": ..., "code": ...}``. Anything else under
``/api/`` becomes a generic JSON 404/405/500 instead of Flask's HTML page.
"""

from typing import Any, Dict, Optional

from flask import current_app, jsonify, request
from flask_wtf.csrf import CSRFError


class UyghurlyError(Exception):
    """Base class; subclasses set ``code`` and ``status_code``."""

    code = 'UNKNOWN_ERROR'
    status_code = 500
    default_message = 'Something went wrong. Please try again.'

    def __init__(
        self,
        message: Optional[str] = None,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        data = {'success': False, 'message': self.message, 'code': self.code}
        if self.details:
            data['details'] = self.details
        return data


class ValidationError(UyghurlyError):
    """Request body or arguments rejected; ``errors`` maps field -> message."""

    code = 'VALIDATION_ERROR'
    status_code = 400
    default_message = 'Validation failed'

    def __init__(self, message: Optional[str] = None, errors: Optional[Dict] = None):
        super().__init__(message, details={'errors': errors} if errors else None)


class AuthenticationError(UyghurlyError):
    """No usable session, or credentials were refused."""

    code = 'UNAUTHENTICATED'
    status_code = 401
    default_message = 'Please sign in first.'


class AuthorizationError(UyghurlyError):
    """Signed in, but not allowed to do this (guests, non-admins)."""

    code = 'UNAUTHORIZED'
    status_code = 403
    default_message = 'Access denied'


class NotFoundError(UyghurlyError):
    """Unknown lesson, unit, quiz or user."""

    code = 'NOT_FOUND'
    status_code = 404
    default_message = 'Resource not found'

    def __init__(self, message: Optional[str] = None, resource: Optional[str] = None):
        super().__init__(message, details={'resource': resource} if resource else None)


class ConflictError(UyghurlyError):
    """The email or username already belongs to another account."""

    code = 'CONFLICT'
    status_code = 409
    default_message = 'This record already exists.'


class RateLimitError(UyghurlyError):
    """Too many attempts in the current window."""

    code = 'RATE_LIMITED'
    status_code = 429
    default_message = 'Too many attempts. Please try again later.'


class FeatureUnavailableError(UyghurlyError):
    """Switched off in this build (static export) or an upstream is unreachable."""

    code = 'FEATURE_UNAVAILABLE'
    status_code = 503
    default_message = 'This feature is not available in this version.'


def error_response(message: str, code: str = 'ERROR', status_code: int = 400) -> tuple:
    return jsonify({'success': False, 'message': message, 'code': code}), status_code


def success_response(data: Any = None, message: Optional[str] = None) -> dict:
    """Wrap a payload as ``{"success": true, "data": ..., "message": ...}``."""
    response = {'success': True}
    if data is not None:
        response['data'] = data
    if message:
        response['message'] = message
    return response


def _is_api_request() -> bool:
    return '/api/' in request.path


def register_error_handlers(app):
    """Register error handlers with Flask app."""

    @app.errorhandler(UyghurlyError)
    def handle_uyghurly_error(error):
        if error.status_code >= 500:
            current_app.logger.error(f"{error.code}: {error.message}")
        else:
            current_app.logger.warning(f"{error.code}: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(CSRFError)
    def handle_csrf_error(error):
        current_app.logger.warning(f"CSRF rejected on {request.path}: {error.description}")
        return error_response(
            'Your session has expired. Please refresh and try again.', 'CSRF_FAILED', 400
        )

    @app.errorhandler(404)
    def handle_not_found(error):
        if _is_api_request():
            return error_response('Endpoint not found', 'NOT_FOUND', 404)
        return error

    @app.errorhandler(405)
    def handle_method_not_allowed(error):
        if _is_api_request():
            return error_response(f'{request.method} is not supported here', 'METHOD_NOT_ALLOWED', 405)
        return error

    @app.errorhandler(500)
    def handle_internal_error(error):
        current_app.logger.exception('Internal server error')
        if _is_api_request():
            return error_response('Internal server error', 'SERVER_ERROR', 500)
        return error
