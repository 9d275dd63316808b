from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError
import logging

from utils.exceptions import (
    AccountNotFoundError,
    AuthError,
    InvalidCredentialsError,
    StorageError,
    UnauthorizedError,
)


def error_response(error: str, message: str, status: int, details: dict | None = None):
    payload = {"error": error, "message": message, "status": status}
    if details:
        payload["details"] = details
    return jsonify(payload), status


def register_error_handlers(app):
    # 400 Bad Request (generic)
    @app.errorhandler(400)
    def bad_request(e):
        if current_app and current_app.debug:
            logging.exception("Unhandled exception", exc_info=e)
        message = getattr(e, "description", "Bad request")
        return error_response("BAD_REQUEST", message, 400)

    # 403 Forbidden (authenticated, but not the owner)
    @app.errorhandler(403)
    def forbidden(e):
        message = getattr(e, "description", "Forbidden")
        return error_response("FORBIDDEN", message, 403)

    # 404 Not Found
    @app.errorhandler(404)
    def not_found(e):
        message = getattr(e, "description", None) or "Resource not found"
        return error_response("NOT_FOUND", message, 404)

    # 409 Conflict
    @app.errorhandler(409)
    def conflict(e):
        message = getattr(e, "description", "Conflict")
        return error_response("CONFLICT", message, 409)

    # Every failed request authentication looks the same to the caller
    @app.errorhandler(UnauthorizedError)
    def handle_unauthorized(err: UnauthorizedError):
        return error_response("UNAUTHORIZED", "Unauthorized", 401)

    @app.errorhandler(AuthError)
    def handle_auth_error(err: AuthError):
        logging.info("authentication failed: %s", err.__class__.__name__)
        return error_response("UNAUTHORIZED", "Unauthorized", 401)

    @app.errorhandler(InvalidCredentialsError)
    def handle_invalid_credentials(err: InvalidCredentialsError):
        return error_response("UNAUTHORIZED", "Incorrect email or password", 401)

    @app.errorhandler(AccountNotFoundError)
    def handle_account_not_found(err: AccountNotFoundError):
        if current_app.config.get("LOGIN_HIDE_UNKNOWN_ACCOUNTS"):
            return error_response("UNAUTHORIZED", "Incorrect email or password", 401)
        return error_response("NOT_FOUND", "User not found", 404)

    # Marshmallow validation errors map to 400
    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        # err.messages contains field-level details
        if current_app and current_app.debug:
            logging.exception("Unhandled exception", exc_info=err)
        return error_response("VALIDATION_ERROR", "Invalid input", 400, details=err.messages)

    # Integrity errors (unique constraints, FK violations, check constraints)
    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        message = str(getattr(err, "orig", err))
        lower_msg = message.lower()
        if current_app and current_app.debug:
            logging.exception("Unhandled exception", exc_info=err)
        if "unique constraint" in lower_msg or "unique violation" in lower_msg:
            return error_response("CONFLICT", "Unique constraint violated.", 409)
        if "foreign key constraint" in lower_msg:
            return error_response("BAD_REQUEST", "Foreign key constraint failed.", 400)
        return error_response("BAD_REQUEST", "Integrity error.", 400)

    @app.errorhandler(StorageError)
    def handle_storage_error(err: StorageError):
        logging.error("storage failure: %s", err, exc_info=err.__cause__ or err)
        return error_response("INTERNAL_ERROR", "An unexpected error occurred", 500)

    # Werkzeug HTTPExceptions map to their status codes
    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        return error_response(err.name.upper().replace(" ", "_"), err.description, err.code or 400)

    # 500 Internal Error (catch-all)
    @app.errorhandler(Exception)
    def internal_error(err: Exception):
        # In dev, include exception details to speed up debugging
        logging.exception("Unhandled exception", exc_info=err)
        details = None
        if current_app and current_app.debug:
            details = {"type": err.__class__.__name__, "message": str(err)}
        return error_response("INTERNAL_ERROR", "An unexpected error occurred", 500, details=details)
