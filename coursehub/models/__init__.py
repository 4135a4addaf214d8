from .user import User, AccountType, user_courses
from .course import Course, Category, Section, SubSection, course_students
from .progress import CourseProgress
from .payment import Payment
