"""
Application error hierarchy.

Routes and services raise these; the handlers registered by
register_error_handlers() turn them into {"success": false, "message": ...}
responses with the matching status code.

    CourseHubError                  500
    ├── ValidationError             400
    ├── NotFoundError               404
    ├── AuthenticationError         401
    ├── AuthorizationError          401
    ├── ConflictError               409
    ├── SignatureMismatchError      400
    ├── EnrollmentError             500
    └── DependencyError             502
        ├── PaymentGatewayError
        └── MailDeliveryError
"""

from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException
from coursehub.extensions import db


class CourseHubError(Exception):
    status_code = 500
    default_message = "Something went wrong"

    def __init__(self, message=None, status_code=None, context=None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        # logged, never returned to the client
        self.context = context or {}
        super().__init__(self.message)

    def to_dict(self):
        return {"success": False, "message": self.message}


class ValidationError(CourseHubError):
    status_code = 400
    default_message = "Invalid request"


class NotFoundError(CourseHubError):
    status_code = 404
    default_message = "Resource not found"


class AuthenticationError(CourseHubError):
    status_code = 401
    default_message = "Authentication failed"


class AuthorizationError(CourseHubError):
    status_code = 401
    default_message = "You are not allowed to access this route"


class ConflictError(CourseHubError):
    status_code = 409
    default_message = "Resource already exists"


class SignatureMismatchError(CourseHubError):
    status_code = 400
    default_message = "Payment Failed: Signature mismatch"


class EnrollmentError(CourseHubError):
    """Payment was verified but the enrollment batch could not be applied."""
    status_code = 500
    default_message = "Payment Verified but failed to enroll students"


class DependencyError(CourseHubError):
    status_code = 502
    default_message = "An upstream service failed"


class PaymentGatewayError(DependencyError):
    default_message = "Could not initiate order"


class MailDeliveryError(DependencyError):
    default_message = "Could not send email"


def register_error_handlers(app):
    @app.errorhandler(CourseHubError)
    def handle_app_error(error):
        if error.status_code >= 500:
            app.logger.error(f"{type(error).__name__}: {error.message} {error.context}")
        else:
            app.logger.info(f"{type(error).__name__}: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({"success": False, "message": error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        current_app.logger.exception("Unhandled error while processing request")
        return jsonify({"success": False, "message": "Internal server error"}), 500
