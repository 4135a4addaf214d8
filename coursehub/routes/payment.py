from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required
from coursehub.exceptions import SignatureMismatchError, ValidationError
from coursehub.services import payments
from coursehub.utils.auth import current_user_id, student_required
from coursehub.utils.validation import parse_amount, parse_id

bp = Blueprint("payments", __name__)


def parse_course_ids(courses, message="Payment Failed: Invalid course id"):
    """Accept a single course id or a list of them."""
    if not isinstance(courses, list):
        courses = [courses]
    if not courses:
        raise ValidationError(message)
    return [parse_id(course_id, message) for course_id in courses]


@bp.route("/capturePayment", methods=["POST"])
@jwt_required()
@student_required
def capture_payment():
    """Create a Razorpay order for the requested course (or courses)."""
    data = request.get_json(silent=True) or {}
    courses = data.get("courses") or data.get("course_id")
    user_id = current_user_id()

    if not courses:
        raise ValidationError("Please provide valid course ID")

    course_ids = parse_course_ids(courses, "Please provide valid course ID")
    courses, order = payments.capture_payment(course_ids, user_id)
    first = courses[0]

    return jsonify({
        "success": True,
        "data": {
            "courseName": first.course_name,
            "courseDescription": first.course_description,
            "thumbnail": first.thumbnail,
            "courses": [{"id": c.id, "courseName": c.course_name} for c in courses],
            "orderId": order["id"],
            "currency": order["currency"],
            "amount": order["amount"],
        }
    }), 200


@bp.route("/verifyPayment", methods=["POST"])
@jwt_required()
@student_required
def verify_payment():
    data = request.get_json(silent=True) or {}
    order_id = data.get("razorpay_order_id")
    payment_id = data.get("razorpay_payment_id")
    signature = data.get("razorpay_signature")
    courses = data.get("courses")
    user_id = current_user_id()

    if not all([order_id, payment_id, signature, courses, user_id]):
        raise ValidationError("Payment Failed: Missing parameters")

    course_ids = parse_course_ids(courses)

    secret = current_app.config.get("RAZORPAY_SECRET")
    if not payments.verify_signature(secret, order_id, payment_id, signature):
        current_app.logger.warning(f"Signature mismatch for order {order_id} (user {user_id})")
        raise SignatureMismatchError()

    payments.check_order(order_id, course_ids, user_id)
    enrolled = payments.enroll_students(course_ids, user_id, order_id, payment_id)

    return jsonify({
        "success": True,
        "message": "Payment Verified",
        "data": {"enrolledCourses": [course.id for course in enrolled]}
    }), 200


@bp.route("/sendPaymentSuccessEmail", methods=["POST"])
@jwt_required()
@student_required
def send_payment_success_email():
    data = request.get_json(silent=True) or {}
    order_id = data.get("orderId")
    payment_id = data.get("paymentId")
    amount = data.get("amount")
    user_id = current_user_id()

    if not all([order_id, payment_id, amount, user_id]):
        raise ValidationError("Please provide all the details")

    amount = parse_amount(amount)
    payments.send_payment_success_email(user_id, order_id, payment_id, amount)

    return jsonify({"success": True, "message": "Payment email sent"}), 200
