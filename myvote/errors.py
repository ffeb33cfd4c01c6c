# myvote/errors.py

import logging
from flask import jsonify, request
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)

# Every failure leaves the API as {"error": message} with a matching status.


class MyVoteError(Exception):
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_response(self):
        return {'error': self.message}


class ValidationError(MyVoteError, ValueError):
    status_code = 400


class AuthError(MyVoteError):
    status_code = 401


class Unauthorized(MyVoteError):
    status_code = 401


class Forbidden(MyVoteError):
    status_code = 403


class NotFound(MyVoteError):
    status_code = 404


class ConflictError(MyVoteError):
    status_code = 409


class InternalError(MyVoteError):
    status_code = 500


def register_error_handlers(app):
    @app.errorhandler(MyVoteError)
    def handle_myvote_error(exc):
        if exc.status_code >= 500:
            logger.error("%s on %s: %s", type(exc).__name__, request.path, exc.message)
        else:
            logger.info("%s on %s: %s", type(exc).__name__, request.path, exc.message)
        return jsonify(exc.to_response()), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(exc):
        return jsonify({'error': exc.description}), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected(exc):
        # Never leak internals to the client
        logger.error("Unhandled exception on %s: %s", request.path, exc, exc_info=True)
        return jsonify({'error': 'Internal server error'}), 500
