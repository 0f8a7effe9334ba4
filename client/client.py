import json
import logging
import os

import requests

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = os.environ.get('PLATFORM_API_URL', 'http://localhost:5000')
DEFAULT_TOKEN_FILE = os.path.join(os.path.expanduser('~'), '.elearning', 'token.json')


class ApiError(Exception):
    def __init__(self, status_code, message, payload=None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.payload = payload or {}


class TokenStore:
    """Keeps the bearer token between runs, in a small JSON file."""

    def __init__(self, path=DEFAULT_TOKEN_FILE):
        self.path = path

    def get(self):
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                return json.load(f).get('token')
        except FileNotFoundError:
            return None
        except (OSError, ValueError, AttributeError):
            logger.warning("Unreadable token file %s", self.path)
            return None

    def set(self, token):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump({'token': token}, f)

    def clear(self):
        try:
            os.remove(self.path)
        except FileNotFoundError:
            pass


class PlatformClient:
    def __init__(self, base_url=DEFAULT_BASE_URL, token_store=None, session=None, timeout=10):
        self.base_url = base_url.rstrip('/')
        self.token_store = token_store or TokenStore()
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def token(self):
        return self.token_store.get()

    def _headers(self, auth):
        if not auth:
            return {}
        token = self.token
        if not token:
            return {}
        return {'Authorization': f"Bearer {token}"}

    def _request(self, method, path, payload=None, auth=False):
        response = self.session.request(
            method,
            f"{self.base_url}{path}",
            json=payload,
            headers=self._headers(auth),
            timeout=self.timeout,
        )
        try:
            body = response.json()
        except ValueError:
            body = None

        if not 200 <= response.status_code < 300:
            message = body.get('message') if isinstance(body, dict) else None
            raise ApiError(response.status_code, message or response.reason, body)
        return body

    def register(self, name, email, password, phone=None, address=None):
        payload = {'name': name, 'email': email, 'password': password}
        if phone is not None:
            payload['phone'] = phone
        if address is not None:
            payload['address'] = address
        return self._request('POST', '/api/register', payload)

    def login(self, email, password):
        body = self._request('POST', '/api/login', {'email': email, 'password': password})
        self.token_store.set(body['token'])
        return body['user']

    def logout(self):
        self.token_store.clear()

    def get_profile(self):
        return self._request('GET', '/api/profile', auth=True)

    def update_profile(self, course_id):
        body = self._request('PUT', '/api/profile', {'courseId': course_id}, auth=True)
        return body['user']

    def list_courses(self):
        return self._request('GET', '/api/courses')

    def get_course(self, course_id):
        return self._request('GET', f"/api/courses/{course_id}")

    def create_course(self, title, category, level, description=None, modules=None):
        payload = {
            'title': title,
            'description': description,
            'category': category,
            'level': level,
            'modules': modules or [],
        }
        body = self._request('POST', '/api/courses', payload, auth=True)
        return body['course']
