from .course import course_bp
