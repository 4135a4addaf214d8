from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required
from coursehub.extensions import db
from coursehub.models import User, AccountType, Course, Category, Section, SubSection, CourseProgress
from coursehub.exceptions import AuthorizationError, NotFoundError, ValidationError, ConflictError
from coursehub.utils.auth import current_user_id, instructor_required, admin_required
from coursehub.utils.validation import parse_id

bp = Blueprint("courses", __name__)


def convert_seconds_to_duration(total_seconds):
    """Render seconds as "1h 2m", "2m 5s" or "7s"."""
    total_seconds = int(total_seconds or 0)
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)

    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"


def parse_seconds(value):
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0


def instructor_summary(user):
    if not user:
        return None
    return {
        "id": user.id,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "email": user.email,
    }


def course_to_dict(course):
    return {
        "id": course.id,
        "courseName": course.course_name,
        "courseDescription": course.course_description,
        "whatYouWillLearn": course.what_you_will_learn,
        "price": course.price,
        "tag": course.tag or [],
        "instructions": course.instructions or [],
        "thumbnail": course.thumbnail,
        "status": course.status,
        "instructor": course.instructor_id,
        "category": course.category_id,
        "studentsEnrolled": [student.id for student in course.students_enrolled],
        "courseContent": [section.id for section in course.course_content],
        "createdAt": course.created_at.isoformat() if course.created_at else None,
    }


def get_course_or_404(course_id):
    course = db.session.get(Course, parse_id(course_id, "Please provide valid course ID"))
    if not course:
        raise NotFoundError(f"Could not find course with id: {course_id}")
    return course


def ensure_owner(course):
    if course.instructor_id != current_user_id():
        raise AuthorizationError("You are not the instructor of this course")


# ---------------------------------------------------------------- categories

@bp.route("/createCategory", methods=["POST"])
@jwt_required()
@admin_required
def create_category():
    data = request.get_json(silent=True) or {}
    name = (data.get("name") or "").strip()
    description = data.get("description")

    if not name or not description:
        raise ValidationError("All fields are required")

    if Category.query.filter_by(name=name).first():
        raise ConflictError("Category already exists")

    category = Category(name=name, description=description)
    db.session.add(category)
    db.session.commit()

    return jsonify({
        "success": True,
        "message": "Category Created Successfully",
        "data": {"id": category.id, "name": category.name, "description": category.description}
    }), 200


@bp.route("/showAllCategories", methods=["GET"])
def show_all_categories():
    categories = Category.query.order_by(Category.id).all()
    return jsonify({
        "success": True,
        "data": [
            {"id": c.id, "name": c.name, "description": c.description}
            for c in categories
        ]
    }), 200


# ------------------------------------------------------------------- courses

@bp.route("/createCourse", methods=["POST"])
@jwt_required()
@instructor_required
def create_course():
    data = request.get_json(silent=True) or {}
    course_name = data.get("courseName")
    course_description = data.get("courseDescription")
    what_you_will_learn = data.get("whatYouWillLearn")
    price = data.get("price")
    tag = data.get("tag")
    category_id = data.get("category")
    thumbnail = data.get("thumbnail")
    status = data.get("status") or "Draft"
    instructions = data.get("instructions") or []

    if not all([course_name, course_description, what_you_will_learn, price, tag, thumbnail, category_id]):
        raise ValidationError("All Fields are Mandatory")

    if status not in ("Draft", "Published"):
        raise ValidationError("Invalid course status")

    try:
        price = float(price)
    except (TypeError, ValueError):
        raise ValidationError("Price must be a number")

    instructor = User.query.filter_by(
        id=current_user_id(),
        account_type=AccountType.INSTRUCTOR
    ).first()
    if not instructor:
        raise NotFoundError("Instructor Details Not Found")

    category = db.session.get(Category, category_id)
    if not category:
        raise NotFoundError("Category Details Not Found")

    course = Course(
        course_name=course_name,
        course_description=course_description,
        what_you_will_learn=what_you_will_learn,
        price=price,
        tag=tag if isinstance(tag, list) else [tag],
        instructions=instructions if isinstance(instructions, list) else [instructions],
        thumbnail=thumbnail,
        status=status,
        instructor=instructor,
        category=category,
    )
    db.session.add(course)
    instructor.courses.append(course)
    db.session.commit()

    current_app.logger.info(f"Instructor {instructor.id} created course {course.id}")
    return jsonify({
        "success": True,
        "message": "Course Created Successfully",
        "data": course_to_dict(course)
    }), 200


@bp.route("/getAllCourses", methods=["GET"])
def get_all_courses():
    rows = (
        db.session.query(Course, User)
        .outerjoin(User, User.id == Course.instructor_id)
        .order_by(Course.id)
        .all()
    )

    result = []
    for course, instructor in rows:
        result.append({
            "id": course.id,
            "courseName": course.course_name,
            "price": course.price,
            "thumbnail": course.thumbnail,
            "instructor": instructor_summary(instructor),
            "studentsEnrolled": [student.id for student in course.students_enrolled],
        })

    return jsonify({"success": True, "data": result}), 200


@bp.route("/getCourseDetails", methods=["POST"])
def get_course_details():
    data = request.get_json(silent=True) or {}
    course = get_course_or_404(data.get("courseId"))

    instructor = db.session.get(User, course.instructor_id)
    category = db.session.get(Category, course.category_id) if course.category_id else None
    sections = Section.query.filter_by(course_id=course.id).order_by(Section.id).all()

    total_seconds = 0
    course_content = []
    for section in sections:
        sub_sections = SubSection.query.filter_by(section_id=section.id).order_by(SubSection.id).all()
        section_data = {
            "id": section.id,
            "sectionName": section.section_name,
            "subSection": []
        }
        for sub in sub_sections:
            total_seconds += parse_seconds(sub.time_duration)
            # videoUrl is only served to enrolled students
            section_data["subSection"].append({
                "id": sub.id,
                "title": sub.title,
                "timeDuration": sub.time_duration,
                "description": sub.description,
            })
        course_content.append(section_data)

    course_details = course_to_dict(course)
    course_details["instructor"] = instructor_summary(instructor)
    course_details["category"] = (
        {"id": category.id, "name": category.name, "description": category.description}
        if category else None
    )
    course_details["courseContent"] = course_content

    return jsonify({
        "success": True,
        "data": {
            "courseDetails": course_details,
            "totalDuration": convert_seconds_to_duration(total_seconds),
        }
    }), 200


@bp.route("/deleteCourse", methods=["DELETE"])
@jwt_required()
@instructor_required
def delete_course():
    data = request.get_json(silent=True) or {}
    course = get_course_or_404(data.get("courseId"))
    ensure_owner(course)
    course_id = course.id

    # Unenroll students (and drop the course from its instructor's list)
    members = User.query.filter(User.courses.any(Course.id == course_id)).all()
    for user in members:
        user.courses.remove(course)
    course.students_enrolled.clear()

    CourseProgress.query.filter_by(course_id=course_id).delete()

    # Delete sections and sub-sections
    for section in Section.query.filter_by(course_id=course_id).all():
        for sub in SubSection.query.filter_by(section_id=section.id).all():
            db.session.delete(sub)
        db.session.delete(section)

    db.session.delete(course)
    db.session.commit()

    current_app.logger.info(f"Course {course_id} deleted, {len(members)} users unlinked")
    return jsonify({
        "success": True,
        "message": "Course deleted successfully",
    }), 200


# ------------------------------------------------------------------- content

@bp.route("/addSection", methods=["POST"])
@jwt_required()
@instructor_required
def add_section():
    data = request.get_json(silent=True) or {}
    section_name = (data.get("sectionName") or "").strip()
    course_id = data.get("courseId")

    if not section_name or not course_id:
        raise ValidationError("Missing required properties")

    course = get_course_or_404(course_id)
    ensure_owner(course)
    section = Section(section_name=section_name, course=course)
    db.session.add(section)
    db.session.commit()

    return jsonify({
        "success": True,
        "message": "Section created successfully",
        "data": {"id": section.id, "sectionName": section.section_name, "courseId": course.id}
    }), 200


@bp.route("/addSubSection", methods=["POST"])
@jwt_required()
@instructor_required
def add_sub_section():
    data = request.get_json(silent=True) or {}
    section_id = data.get("sectionId")
    title = data.get("title")
    time_duration = data.get("timeDuration")
    description = data.get("description")
    video_url = data.get("videoUrl")

    if not all([section_id, title, description, video_url]):
        raise ValidationError("All Fields are Required")

    section = db.session.get(Section, parse_id(section_id, "Please provide valid section ID"))
    if not section:
        raise NotFoundError("Section not found")
    ensure_owner(section.course)

    sub = SubSection(
        title=title,
        time_duration=str(parse_seconds(time_duration)),
        description=description,
        video_url=video_url,
        section=section,
    )
    db.session.add(sub)
    db.session.commit()

    return jsonify({
        "success": True,
        "message": "SubSection created successfully",
        "data": {
            "id": sub.id,
            "sectionId": section.id,
            "title": sub.title,
            "timeDuration": sub.time_duration,
        }
    }), 200
