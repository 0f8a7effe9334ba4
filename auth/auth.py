import logging
from collections import namedtuple
from datetime import datetime, timezone
from functools import wraps

import jwt
from flask import Blueprint, request, jsonify, current_app
from sqlalchemy.exc import IntegrityError

from models import User, UserRole, get_store, validate_registration, validate_login, ValidationError

logger = logging.getLogger(__name__)

# Create Blueprint for auth
auth_bp = Blueprint('auth', __name__)

ALGORITHM = "HS256"

TokenIdentity = namedtuple('TokenIdentity', ['user_id', 'role'])


class DuplicateEmailError(Exception):
    def __init__(self, email):
        super().__init__(f"User with email {email} already exists")
        self.email = email


def issue_token(user_id, role, secret=None, expires_in=None):
    secret = secret or current_app.config['SECRET_KEY']
    if expires_in is None:
        expires_in = current_app.config['TOKEN_EXPIRES']
    return jwt.encode(
        {
            'user_id': user_id,
            'role': role,
            'exp': datetime.now(timezone.utc) + expires_in,
        },
        secret,
        algorithm=ALGORITHM,
    )


def decode_token(token, secret=None):
    """Verify signature and expiry, returning the identity carried by ``token``.

    Raises ``jwt.PyJWTError`` (or a subclass) when the token is tampered
    with, expired or missing a claim.
    """
    secret = secret or current_app.config['SECRET_KEY']
    data = jwt.decode(token, secret, algorithms=[ALGORITHM], options={'require': ['exp']})
    if 'user_id' not in data or 'role' not in data:
        raise jwt.InvalidTokenError("Token is missing identity claims")
    return TokenIdentity(data['user_id'], data['role'])


def _bearer_token():
    auth_header = request.headers.get('Authorization')
    if not auth_header:
        return None
    parts = auth_header.split(' ')
    if len(parts) < 2 or not parts[1]:
        return None
    return parts[1]


# Token verification decorator
def token_required(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        token = _bearer_token()
        if token is None:
            return jsonify({"message": "Token is missing"}), 401

        try:
            identity = decode_token(token)
        except jwt.PyJWTError as e:
            logger.info("Rejected token: %s", e)
            return jsonify({"message": "Token is invalid"}), 403
        return f(identity, *args, **kwargs)
    return decorated


# Admin verification decorator
def admin_required(f):
    @token_required
    @wraps(f)
    def decorated(identity, *args, **kwargs):
        if identity.role != UserRole.ADMIN.value:
            return jsonify({"message": "Unauthorized"}), 403
        return f(identity, *args, **kwargs)
    return decorated


def create_user(session, data, role=UserRole.LEARNER):
    """Persist a new user from validated registration ``data``.

    The password is hashed before the record is added. Raises
    ``DuplicateEmailError`` when the email is already taken.
    """
    if session.query(User).filter_by(email=data['email']).first():
        raise DuplicateEmailError(data['email'])

    new_user = User(
        name=data['name'],
        email=data['email'],
        phone=data.get('phone'),
        address=data.get('address'),
        role=UserRole(role).value,
    )
    new_user.set_password(data['password'])

    session.add(new_user)
    try:
        session.commit()
    except IntegrityError:
        # lost a race with a concurrent registration for the same email
        session.rollback()
        raise DuplicateEmailError(data['email'])
    return new_user


@auth_bp.route('/register', methods=['POST'])
def register():
    data = request.get_json(silent=True)
    try:
        result = validate_registration(data)
        if not result:
            raise ValidationError(result)

        with get_store().session() as session:
            user = create_user(session, result.data)
            logger.info("Registered user %s", user.id)

        return jsonify({"message": "User registered successfully"}), 201

    except (ValidationError, DuplicateEmailError) as e:
        logger.warning("Registration rejected: %s", e)
        return jsonify({"message": "Error registering user", "error": str(e)}), 500
    except Exception as e:
        logger.exception("Error registering user")
        return jsonify({"message": "Error registering user", "error": str(e)}), 500


@auth_bp.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True)
    try:
        result = validate_login(data)
        if not result:
            return jsonify({"message": "Invalid credentials"}), 400

        with get_store().session() as session:
            user = session.query(User).filter_by(email=result.data['email']).first()

            # same answer for unknown email and wrong password
            if not user or not user.check_password(result.data['password']):
                return jsonify({"message": "Invalid credentials"}), 400

            token = issue_token(user.id, user.role)
            return jsonify({
                "message": "Logged in successfully",
                "token": token,
                "user": user.summary(),
            }), 200

    except Exception as e:
        logger.exception("Error logging in")
        return jsonify({"message": "Error logging in", "error": str(e)}), 500
