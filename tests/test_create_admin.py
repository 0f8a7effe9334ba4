import unittest

from create_admin import create_admin
from models import UserRole

from tests.base import ApiTestCase, sample_course


class TestCreateAdmin(ApiTestCase):
    def test_new_admin_can_create_courses(self):
        user, created = create_admin(self.store, "Root", "root@x.com", "s3cret")

        self.assertTrue(created)
        self.assertEqual(user['role'], UserRole.ADMIN.value)

        login = self.login("root@x.com", "s3cret")
        self.assertEqual(login.get_json()['user']['role'], UserRole.ADMIN.value)
        headers = self.auth_headers(login.get_json()['token'])
        response = self.client.post('/api/courses', json=sample_course(), headers=headers)
        self.assertEqual(response.status_code, 201)

    def test_promotes_existing_learner(self):
        self.register()

        user, created = create_admin(self.store, "ignored", "a@x.com", None)

        self.assertFalse(created)
        self.assertEqual(user['name'], "A")
        self.assertEqual(self.count_users(), 1)
        login = self.login()
        self.assertEqual(login.get_json()['user']['role'], UserRole.ADMIN.value)

    def test_rejects_missing_password(self):
        with self.assertRaises(ValueError):
            create_admin(self.store, "Root", "root@x.com", "")
        self.assertEqual(self.count_users(), 0)


if __name__ == '__main__':
    unittest.main()
