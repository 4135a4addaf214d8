from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import create_access_token, set_access_cookies
from coursehub.extensions import db
from coursehub.models import User, AccountType
from coursehub.exceptions import AuthenticationError, ConflictError, ValidationError

bp = Blueprint("auth", __name__)


def user_to_dict(user):
    return {
        "id": user.id,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "email": user.email,
        "accountType": user.account_type.value,
    }


@bp.route("/signup", methods=["POST"])
def signup():
    data = request.get_json(silent=True) or {}
    first_name = (data.get("firstName") or "").strip()
    last_name = (data.get("lastName") or "").strip()
    email = (data.get("email") or "").strip().lower()
    password = data.get("password")
    confirm_password = data.get("confirmPassword")

    if not all([first_name, last_name, email, password, confirm_password]):
        raise ValidationError("All Fields are required")

    if password != confirm_password:
        raise ValidationError("Password and Confirm Password do not match")

    try:
        account_type = AccountType(data.get("accountType", AccountType.STUDENT.value))
    except ValueError:
        raise ValidationError("Invalid account type")

    if User.query.filter_by(email=email).first():
        raise ConflictError("User already exists. Please sign in to continue.")

    user = User(first_name=first_name, last_name=last_name, email=email, account_type=account_type)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()

    current_app.logger.info(f"Registered {account_type.value} {email}")
    return jsonify({
        "success": True,
        "message": "User registered successfully",
        "data": user_to_dict(user)
    }), 200


@bp.route("/login", methods=["POST"])
def login():
    data = request.get_json(silent=True) or {}
    email = (data.get("email") or "").strip().lower()
    password = data.get("password")

    if not email or not password:
        raise ValidationError("Please fill up all the required fields")

    user = User.query.filter_by(email=email).first()
    if not user or not user.check_password(password):
        raise AuthenticationError("Invalid credentials")

    token = create_access_token(
        identity=str(user.id),
        additional_claims={"role": user.account_type.value}
    )

    response = jsonify({
        "success": True,
        "message": "User login success",
        "data": {"token": token, "user": user_to_dict(user)}
    })
    set_access_cookies(response, token)
    return response, 200
