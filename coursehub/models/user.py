import enum
from coursehub.extensions import db
from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash


class AccountType(enum.Enum):
    STUDENT = "Student"
    INSTRUCTOR = "Instructor"
    ADMIN = "Admin"


# enrolled courses for students, owned courses for instructors
user_courses = db.Table(
    "user_courses",
    db.Column("user_id", db.Integer, db.ForeignKey("user.id"), primary_key=True),
    db.Column("course_id", db.Integer, db.ForeignKey("course.id"), primary_key=True)
)


class User(db.Model):
    __tablename__ = "user"

    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(80), nullable=False)
    last_name = db.Column(db.String(80), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=True)
    account_type = db.Column(
        db.Enum(AccountType, values_callable=lambda e: [m.value for m in e], name="account_type"),
        nullable=False,
        default=AccountType.STUDENT
    )
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    courses = db.relationship("Course", secondary=user_courses, lazy="select")
    course_progress = db.relationship("CourseProgress", back_populates="user")

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return bool(self.password_hash) and check_password_hash(self.password_hash, password)

    def __repr__(self):
        return f"<User {self.email}>"
