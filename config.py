import os
from datetime import timedelta

from dotenv import load_dotenv
from sqlalchemy.pool import StaticPool

load_dotenv()


class Config:
    # Store
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', 'sqlite:///elearning.db')
    SQLALCHEMY_ENGINE_OPTIONS = {}

    # Tokens
    SECRET_KEY = os.environ.get('JWT_SECRET', 'change-this-secret-key-in-production-please')
    TOKEN_EXPIRES = timedelta(hours=1)

    # Server
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', 5000))
    DEBUG = os.environ.get('FLASK_DEBUG', '0') == '1'

    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    # one shared in-memory database across threads
    SQLALCHEMY_ENGINE_OPTIONS = {
        'poolclass': StaticPool,
        'connect_args': {'check_same_thread': False},
    }
    SECRET_KEY = 'test-secret-key-used-only-by-the-test-suite'
    LOG_LEVEL = 'WARNING'
