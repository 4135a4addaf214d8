from functools import wraps
from flask import current_app
from flask_jwt_extended import get_jwt, get_jwt_identity
from coursehub.exceptions import AuthorizationError
from coursehub.models import AccountType


def current_user_id():
    """Subject id of the authenticated request, as stored in the token."""
    return int(get_jwt_identity())


def current_role():
    try:
        return AccountType(get_jwt().get("role"))
    except ValueError:
        raise AuthorizationError("User role cannot be verified, please try again")


def role_required(role):
    """Permit the wrapped view only when the token's role claim equals `role`.

    Must sit below @jwt_required() so authentication has already run.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            if current_role() is not role:
                current_app.logger.info(f"Rejected {role.value} route for role {get_jwt().get('role')}")
                raise AuthorizationError(f"This is a protected route for {role.value}s only")
            return fn(*args, **kwargs)
        return wrapper
    return decorator


student_required = role_required(AccountType.STUDENT)
instructor_required = role_required(AccountType.INSTRUCTOR)
admin_required = role_required(AccountType.ADMIN)
