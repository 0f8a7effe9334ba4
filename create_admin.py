"""
Script to create an administrator account
Usage: python create_admin.py --name "Admin" --email admin@example.com [--password ...]

Registration through the API always creates learners; this is the way to get
an account that may create courses. An existing account is promoted instead.
"""
import argparse
import getpass
import logging
import sys

from auth import create_user
from config import Config
from models import Store, User, UserRole, validate_registration

logger = logging.getLogger(__name__)


def create_admin(store, name, email, password):
    """Create an administrator, or promote the user already owning ``email``.

    Returns ``(user_dict, created)``.
    """
    with store.session() as session:
        existing = session.query(User).filter_by(email=email).first()
        if existing:
            existing.role = UserRole.ADMIN.value
            if password:
                existing.set_password(password)
            session.commit()
            return existing.summary(), False

        result = validate_registration({'name': name, 'email': email, 'password': password})
        if not result:
            raise ValueError(result.message)
        user = create_user(session, result.data, role=UserRole.ADMIN)
        return user.summary(), True


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Create or promote an administrator account")
    parser.add_argument('--name', default='Admin', help="display name for a new account")
    parser.add_argument('--email', required=True)
    parser.add_argument('--password', help="prompted for when omitted")
    return parser.parse_args(argv)


def main(argv=None):
    logging.basicConfig(level=Config.LOG_LEVEL)
    args = parse_args(argv)
    password = args.password or getpass.getpass("Admin password: ")

    store = Store(Config.SQLALCHEMY_DATABASE_URI, **Config.SQLALCHEMY_ENGINE_OPTIONS).init()
    try:
        user, created = create_admin(store, args.name, args.email, password)
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    finally:
        store.close()

    if created:
        print(f"Admin account created: {user['email']} ({user['id']})")
    else:
        print(f"Existing account promoted to admin: {user['email']}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
