from coursehub.extensions import db
from datetime import datetime

# denormalized enrolled-student list of a course
course_students = db.Table(
    "course_students",
    db.Column("course_id", db.Integer, db.ForeignKey("course.id"), primary_key=True),
    db.Column("user_id", db.Integer, db.ForeignKey("user.id"), primary_key=True)
)


class Category(db.Model):
    __tablename__ = "category"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), unique=True, nullable=False)
    description = db.Column(db.Text)

    courses = db.relationship("Course", back_populates="category")


class Course(db.Model):
    __tablename__ = "course"

    id = db.Column(db.Integer, primary_key=True)
    course_name = db.Column(db.String(200), nullable=False)
    course_description = db.Column(db.Text, nullable=False)
    what_you_will_learn = db.Column(db.Text)
    price = db.Column(db.Float, nullable=False)
    tag = db.Column(db.JSON, default=list)
    instructions = db.Column(db.JSON, default=list)
    thumbnail = db.Column(db.String(255))
    status = db.Column(db.Enum("Draft", "Published", name="course_status"), nullable=False, default="Draft")
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    instructor_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False)
    category_id = db.Column(db.Integer, db.ForeignKey("category.id"), nullable=True)

    instructor = db.relationship("User", foreign_keys=[instructor_id])
    category = db.relationship("Category", back_populates="courses")
    students_enrolled = db.relationship("User", secondary=course_students, lazy="select")

    course_content = db.relationship(
        "Section",
        back_populates="course",
        order_by="Section.id"
    )

    def has_student(self, user_id):
        return any(student.id == user_id for student in self.students_enrolled)


class Section(db.Model):
    __tablename__ = "sections"

    id = db.Column(db.Integer, primary_key=True)
    section_name = db.Column(db.String(255), nullable=False)
    course_id = db.Column(db.Integer, db.ForeignKey("course.id"), nullable=False)

    course = db.relationship("Course", back_populates="course_content")
    sub_sections = db.relationship(
        "SubSection",
        back_populates="section",
        order_by="SubSection.id"
    )


class SubSection(db.Model):
    __tablename__ = "sub_sections"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    # seconds, as reported by the uploader
    time_duration = db.Column(db.String(20), default="0")
    description = db.Column(db.Text)
    video_url = db.Column(db.String(255))
    section_id = db.Column(db.Integer, db.ForeignKey("sections.id"), nullable=False)

    section = db.relationship("Section", back_populates="sub_sections")
