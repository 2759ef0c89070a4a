import logging
from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class SkillForgeError(Exception):
    """Base class for errors that map onto an HTTP error response."""

    status_code = 500
    message = 'Internal server error'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_dict(self):
        return {'status': 'error', 'message': self.message}


class ValidationError(SkillForgeError):
    status_code = 400
    message = 'Validation failed'

    def __init__(self, message=None, errors=None):
        super().__init__(message)
        self.errors = errors or []

    def to_dict(self):
        payload = super().to_dict()
        if self.errors:
            payload['errors'] = self.errors
        return payload

    @classmethod
    def from_pydantic(cls, exc):
        """Flatten a pydantic ValidationError into field-level messages."""
        errors = []
        for error in exc.errors():
            field = '.'.join(str(part) for part in error['loc']) or 'body'
            message = error['msg']
            # pydantic prefixes custom validator messages
            if message.startswith('Value error, '):
                message = message[len('Value error, '):]
            errors.append({'field': field, 'message': message})
        return cls(errors=errors)


class DuplicateError(SkillForgeError):
    status_code = 400
    message = 'Resource already exists'


class AuthenticationError(SkillForgeError):
    status_code = 401
    message = 'Invalid token.'


class NotFoundError(SkillForgeError):
    status_code = 404
    message = 'Resource not found'


class ConfigurationError(RuntimeError):
    """Raised at start-up when a required setting is missing."""


def register_error_handlers(app):

    @app.errorhandler(SkillForgeError)
    def handle_skillforge_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        message = 'Route not found' if error.code == 404 else error.description
        return jsonify({'status': 'error', 'message': message}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception('Unhandled error: %s', error)
        return jsonify({'status': 'error', 'message': 'Internal server error'}), 500
