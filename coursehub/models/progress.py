from sqlalchemy.ext.mutable import MutableList
from coursehub.extensions import db
from datetime import datetime

class CourseProgress(db.Model):
    __tablename__ = "course_progress"
    __table_args__ = (
        db.UniqueConstraint("course_id", "user_id", name="uq_course_progress_course_user"),
    )

    id = db.Column(db.Integer, primary_key=True)
    course_id = db.Column(db.Integer, db.ForeignKey("course.id"), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False)
    # completed sub-section ids
    completed_videos = db.Column(MutableList.as_mutable(db.JSON), default=list)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    course = db.relationship("Course")
    user = db.relationship("User", back_populates="course_progress")
