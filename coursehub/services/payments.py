"""
Order capture, payment verification and enrollment.

Enrollment touches three records per course (the course's enrolled list, a
new CourseProgress row and the user's course list) plus the Payment ledger
row. They are written in one session transaction: either the whole batch is
committed or nothing is.
"""

import hashlib
import hmac
import uuid
from flask import current_app, render_template
from sqlalchemy.exc import SQLAlchemyError
from coursehub.extensions import db
from coursehub.models import Course, CourseProgress, Payment, User
from coursehub.exceptions import (
    ConflictError,
    EnrollmentError,
    MailDeliveryError,
    NotFoundError,
    ValidationError,
)
from coursehub.services.razorpay import RazorpayClient
from coursehub.utils.mailer import send_email


def generate_signature(secret, order_id, payment_id):
    """hex(HMAC-SHA256(secret, "order_id|payment_id"))"""
    body = f"{order_id}|{payment_id}"
    return hmac.new(secret.encode("utf-8"), body.encode("utf-8"), hashlib.sha256).hexdigest()


def verify_signature(secret, order_id, payment_id, signature):
    if not secret or not isinstance(signature, str):
        return False
    expected = generate_signature(secret, order_id, payment_id)
    return hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8"))


def to_minor_units(price):
    return int(round(float(price) * 100))


def capture_payment(course_ids, user_id, gateway=None):
    """Create one gateway order for courses the user is not enrolled in yet.

    The course and user ids travel with the order as notes, so verification
    can check what was actually paid for. Returns (courses, order). Nothing
    is written locally.
    """
    courses = []
    for course_id in course_ids:
        course = db.session.get(Course, course_id)
        if not course:
            raise NotFoundError("Could not find the course")
        if course.has_student(user_id):
            raise ConflictError("Student is already enrolled")
        if course not in courses:
            courses.append(course)

    gateway = gateway or RazorpayClient.from_config()
    order = gateway.create_order(
        amount=sum(to_minor_units(course.price) for course in courses),
        currency=current_app.config.get("PAYMENT_CURRENCY", "INR"),
        receipt=uuid.uuid4().hex,
        notes={
            "courseIds": ",".join(str(course.id) for course in courses),
            "userId": str(user_id),
        },
    )
    current_app.logger.info(
        f"Created order {order['id']} for courses {[c.id for c in courses]} and user {user_id}"
    )
    return courses, order


def ordered_course_ids(order):
    """Course ids recorded in an order's notes at capture time."""
    notes = order.get("notes")
    # Razorpay returns an empty list when an order has no notes
    if not isinstance(notes, dict):
        return set()
    return {
        int(part) for part in str(notes.get("courseIds", "")).split(",")
        if part.strip().isdigit()
    }


def check_order(order_id, course_ids, user_id, gateway=None):
    """Reject a callback asking for courses its order was not placed for."""
    gateway = gateway or RazorpayClient.from_config()
    order = gateway.fetch_order(order_id)

    notes = order.get("notes")
    if not isinstance(notes, dict):
        notes = {}
    if str(notes.get("userId")) != str(user_id):
        current_app.logger.warning(f"Order {order_id} was not placed by user {user_id}")
        raise ValidationError("Payment Failed: Order does not belong to this user")

    missing = set(course_ids) - ordered_course_ids(order)
    if missing:
        current_app.logger.warning(f"Order {order_id} does not cover courses {sorted(missing)}")
        raise ValidationError("Payment Failed: Courses do not match the order")
    return order


def enroll_students(course_ids, user_id, order_id, payment_id):
    """
    Enroll a user into every course paid for by one verified payment.

    A payment the same user already processed is a no-op, and a course the
    user already belongs to is skipped, so replayed callbacks never enroll
    twice. A payment recorded for another user is refused.

    Returns:
        list: Courses the user was newly enrolled into
    """
    processed = Payment.query.filter_by(razorpay_payment_id=payment_id).first()
    if processed:
        if processed.user_id != user_id:
            raise ConflictError(
                "Payment already used by another account",
                context={"payment_id": payment_id, "user_id": user_id},
            )
        current_app.logger.info(f"Payment {order_id}|{payment_id} already processed")
        return []

    newly_enrolled = []
    try:
        user = db.session.get(User, user_id)
        if not user:
            raise EnrollmentError(context={"user_id": user_id, "reason": "User not found"})

        for course_id in course_ids:
            course = db.session.get(Course, course_id)
            if not course:
                raise EnrollmentError(context={"course_id": course_id, "reason": "Course not found"})

            if course.has_student(user.id):
                continue

            course.students_enrolled.append(user)
            db.session.add(CourseProgress(course=course, user=user, completed_videos=[]))
            if course not in user.courses:
                user.courses.append(course)
            newly_enrolled.append(course)

        db.session.add(Payment(
            user_id=user.id,
            razorpay_order_id=order_id,
            razorpay_payment_id=payment_id,
            course_ids=list(course_ids),
        ))
        db.session.commit()
    except EnrollmentError:
        db.session.rollback()
        raise
    except SQLAlchemyError as e:
        db.session.rollback()
        raise EnrollmentError(context={"user_id": user_id, "error": str(e)}) from e

    send_enrollment_emails(user, newly_enrolled)
    return newly_enrolled


def send_enrollment_emails(user, courses):
    """Mail failures are logged only; the enrollment is already committed."""
    for course in courses:
        try:
            send_email(
                to=user.email,
                subject=f"Successfully Enrolled into {course.course_name}",
                html=render_template(
                    "emails/course_enrollment.html",
                    course_name=course.course_name,
                    name=user.full_name,
                ),
            )
        except MailDeliveryError:
            current_app.logger.warning(
                f"Enrollment email for course {course.id} not delivered to user {user.id}"
            )


def send_payment_success_email(user_id, order_id, payment_id, amount):
    user = db.session.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")

    return send_email(
        to=user.email,
        subject="Payment Received",
        html=render_template(
            "emails/payment_success.html",
            name=user.full_name,
            amount=float(amount) / 100,
            order_id=order_id,
            payment_id=payment_id,
        ),
    )
