import logging

from flask import Blueprint, request, jsonify
from sqlalchemy.exc import SQLAlchemyError

from auth import admin_required
from models import Course, CourseModule, get_store, validate_course, ValidationError

logger = logging.getLogger(__name__)

course_bp = Blueprint('course', __name__)


@course_bp.route('/courses', methods=['GET'])
def get_courses():
    try:
        with get_store().session() as session:
            courses = session.query(Course).all()
            return jsonify([course.to_dict() for course in courses]), 200

    except Exception as e:
        logger.exception("Error fetching courses")
        return jsonify({"message": "Error fetching courses", "error": str(e)}), 500


@course_bp.route('/courses/<course_id>', methods=['GET'])
def get_course_detail(course_id):
    try:
        with get_store().session() as session:
            course = session.get(Course, course_id)
            if not course:
                logger.debug("Course not found: %s", course_id)
                return jsonify({"message": "Course not found"}), 404

            return jsonify(course.to_dict()), 200

    except Exception as e:
        logger.exception("Error fetching course %s", course_id)
        return jsonify({"message": "Error fetching course", "error": str(e)}), 500


@course_bp.route('/courses', methods=['POST'])
@admin_required
def create_course(identity):
    data = request.get_json(silent=True)
    try:
        result = validate_course(data)
        if not result:
            raise ValidationError(result)

        with get_store().session() as session:
            new_course = Course(
                title=result.data['title'],
                description=result.data['description'],
                category=result.data['category'],
                level=result.data['level'],
            )
            for order, module in enumerate(result.data['modules'], start=1):
                new_course.modules.append(CourseModule(
                    title=module['title'],
                    content_url=module['content_url'],
                    type=module['type'],
                    order=order,
                ))

            session.add(new_course)
            session.commit()
            logger.info("Course %s created by %s", new_course.id, identity.user_id)

            return jsonify({
                "message": "Course created successfully",
                "course": new_course.to_dict(),
            }), 201

    except ValidationError as e:
        logger.warning("Course rejected: %s", e)
        return jsonify({"message": "Error creating course", "error": str(e)}), 500
    except SQLAlchemyError as e:
        logger.exception("Database error creating course")
        return jsonify({"message": "Error creating course", "error": str(e)}), 500
    except Exception as e:
        logger.exception("Error creating course")
        return jsonify({"message": "Error creating course", "error": str(e)}), 500
