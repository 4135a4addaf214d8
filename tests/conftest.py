"""
Shared pytest fixtures.

Every test gets a fresh application bound to an in-memory SQLite database,
seeded with one user per role, a category and a course. Tokens are minted
with the same claims the login route issues.
"""

from unittest.mock import MagicMock, patch

import pytest
from flask_jwt_extended import create_access_token

from coursehub import create_app
from coursehub.config import TestConfig
from coursehub.extensions import db
from coursehub.models import AccountType, Category, Course, Section, SubSection, User


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def make_user(first_name, email, account_type, password="secret123"):
    user = User(first_name=first_name, last_name="Tester", email=email, account_type=account_type)
    user.set_password(password)
    db.session.add(user)
    return user


@pytest.fixture
def student(app):
    user = make_user("Sam", "student@example.com", AccountType.STUDENT)
    db.session.commit()
    return user


@pytest.fixture
def other_student(app):
    user = make_user("Noor", "other.student@example.com", AccountType.STUDENT)
    db.session.commit()
    return user


@pytest.fixture
def instructor(app):
    user = make_user("Ira", "instructor@example.com", AccountType.INSTRUCTOR)
    db.session.commit()
    return user


@pytest.fixture
def other_instructor(app):
    user = make_user("Omar", "other.instructor@example.com", AccountType.INSTRUCTOR)
    db.session.commit()
    return user


@pytest.fixture
def admin(app):
    user = make_user("Ada", "admin@example.com", AccountType.ADMIN)
    db.session.commit()
    return user


@pytest.fixture
def category(app):
    category = Category(name="Web Development", description="Frontend and backend")
    db.session.add(category)
    db.session.commit()
    return category


@pytest.fixture
def course(app, instructor, category):
    """A published course priced at 500 INR with two sections of content."""
    course = Course(
        course_name="Python for the Web",
        course_description="Build backends with Flask",
        what_you_will_learn="Routing, ORMs, payments",
        price=500,
        tag=["python", "flask"],
        instructions=["Bring a laptop"],
        thumbnail="https://cdn.example.com/python.png",
        status="Published",
        instructor=instructor,
        category=category,
    )
    db.session.add(course)
    instructor.courses.append(course)

    intro = Section(section_name="Introduction", course=course)
    advanced = Section(section_name="Advanced", course=course)
    db.session.add_all([
        intro,
        advanced,
        SubSection(title="Welcome", time_duration="125", description="Hello",
                   video_url="https://cdn.example.com/v1.mp4", section=intro),
        SubSection(title="Setup", time_duration="3600", description="Install",
                   video_url="https://cdn.example.com/v2.mp4", section=intro),
        SubSection(title="Deploy", time_duration="55", description="Ship it",
                   video_url="https://cdn.example.com/v3.mp4", section=advanced),
    ])
    db.session.commit()
    return course


@pytest.fixture
def second_course(app, instructor, category):
    course = Course(
        course_name="Data Structures",
        course_description="Lists, trees and graphs",
        what_you_will_learn="Algorithms",
        price=299.5,
        tag=["dsa"],
        thumbnail="https://cdn.example.com/dsa.png",
        status="Published",
        instructor=instructor,
        category=category,
    )
    db.session.add(course)
    instructor.courses.append(course)
    db.session.commit()
    return course


def token_for(user):
    return create_access_token(
        identity=str(user.id),
        additional_claims={"role": user.account_type.value},
    )


def auth_header(user):
    return {"Authorization": f"Bearer {token_for(user)}"}


def gateway_response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = payload or {}
    response.text = str(payload)
    return response


@pytest.fixture
def razorpay_orders():
    """
    Orders the mocked gateway knows about.

    Yields place(order_id, user, course_ids), which registers an order with
    the same notes capture sends. Unknown ids get a 400 from the gateway.
    """
    orders = {}

    def fetch(url, **kwargs):
        order = orders.get(url.rsplit("/", 1)[-1])
        if order is None:
            return gateway_response(400, {"error": {"code": "BAD_REQUEST_ERROR"}})
        return gateway_response(200, order)

    def place(order_id, user, course_ids):
        orders[order_id] = {
            "id": order_id,
            "amount": 0,
            "currency": "INR",
            "notes": {
                "courseIds": ",".join(str(course_id) for course_id in course_ids),
                "userId": str(user.id),
            },
        }

    with patch("coursehub.services.razorpay.requests.get", side_effect=fetch):
        yield place
