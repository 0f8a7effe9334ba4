import logging

from flask import Blueprint, request, jsonify
from sqlalchemy.exc import SQLAlchemyError

from auth import token_required
from models import User, get_store, validate_enrollment, ValidationError

logger = logging.getLogger(__name__)

account_bp = Blueprint('account', __name__)


@account_bp.route('/profile', methods=['GET'])
@token_required
def get_profile(identity):
    try:
        with get_store().session() as session:
            user = session.get(User, identity.user_id)
            if not user:
                return jsonify({"message": "User not found"}), 404

            return jsonify(user.to_dict()), 200

    except Exception as e:
        logger.exception("Error fetching user profile")
        return jsonify({"message": "Error fetching user profile", "error": str(e)}), 500


@account_bp.route('/profile', methods=['PUT'])
@token_required
def update_profile(identity):
    """Record a course as completed for the current user.

    Repeating the call with the same course leaves a single entry. The
    course id is taken as given and not looked up.
    """
    data = request.get_json(silent=True)
    try:
        with get_store().session() as session:
            user = session.get(User, identity.user_id)
            if not user:
                return jsonify({"message": "User not found"}), 404

            result = validate_enrollment(data)
            if not result:
                raise ValidationError(result)

            course_id = result.data['course_id']
            if user.complete_course(course_id):
                session.commit()
                logger.info("User %s completed course %s", user.id, course_id)

            return jsonify({
                "message": "Profile updated successfully",
                "user": user.to_dict(),
            }), 200

    except ValidationError as e:
        logger.warning("Profile update rejected: %s", e)
        return jsonify({"message": "Error updating profile", "error": str(e)}), 500
    except SQLAlchemyError as e:
        logger.exception("Database error updating profile")
        return jsonify({"message": "Error updating profile", "error": str(e)}), 500
    except Exception as e:
        logger.exception("Error updating profile")
        return jsonify({"message": "Error updating profile", "error": str(e)}), 500
