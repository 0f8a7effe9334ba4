import unittest

from app import create_app
from config import TestConfig
from models import Store, User, UserRole
from auth import create_user, issue_token


class ApiTestCase(unittest.TestCase):
    """Flask test client over a fresh in-memory store for every test."""

    def setUp(self):
        self.store = Store(TestConfig.SQLALCHEMY_DATABASE_URI, **TestConfig.SQLALCHEMY_ENGINE_OPTIONS)
        self.app = create_app(TestConfig, store=self.store)
        self.client = self.app.test_client()

    def tearDown(self):
        self.store.close()

    def register(self, name="A", email="a@x.com", password="p1", **extra):
        payload = {'name': name, 'email': email, 'password': password}
        payload.update(extra)
        return self.client.post('/api/register', json=payload)

    def login(self, email="a@x.com", password="p1"):
        return self.client.post('/api/login', json={'email': email, 'password': password})

    def token_for(self, email="a@x.com", password="p1"):
        response = self.login(email, password)
        self.assertEqual(response.status_code, 200, response.get_json())
        return response.get_json()['token']

    def make_admin(self, email="admin@x.com", password="secret"):
        with self.store.session() as session:
            user = create_user(
                session,
                {'name': "Admin", 'email': email, 'password': password},
                role=UserRole.ADMIN,
            )
            return user.id

    def admin_token(self):
        user_id = self.make_admin()
        with self.app.app_context():
            return issue_token(user_id, UserRole.ADMIN.value)

    def auth_headers(self, token):
        return {'Authorization': f"Bearer {token}"}

    def count_users(self):
        with self.store.session() as session:
            return session.query(User).count()

    def assertNoPassword(self, body):
        text = str(body)
        self.assertNotIn('password', text)
        self.assertNotIn('scrypt:', text)
        self.assertNotIn('pbkdf2:', text)


def sample_course(**overrides):
    course = {
        'title': "Budgeting basics",
        'description': "Plan a monthly household budget",
        'category': 'finance',
        'level': 'beginner',
        'modules': [
            {'title': "Intro", 'content_url': "https://example.com/intro.mp4", 'type': 'video'},
            {'title': "Reading", 'content_url': "https://example.com/notes", 'type': 'text'},
            {'title': "Check yourself", 'content_url': "https://example.com/quiz", 'type': 'quiz'},
        ],
    }
    course.update(overrides)
    return course
