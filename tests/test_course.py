import unittest

from models import Course

from tests.base import ApiTestCase, sample_course


class TestCourses(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.admin_headers = self.auth_headers(self.admin_token())

    def count_courses(self):
        with self.store.session() as session:
            return session.query(Course).count()

    def create(self, payload=None, headers=None):
        return self.client.post(
            '/api/courses',
            json=payload if payload is not None else sample_course(),
            headers=headers if headers is not None else self.admin_headers,
        )

    def test_admin_creates_course(self):
        response = self.create()

        self.assertEqual(response.status_code, 201)
        body = response.get_json()
        self.assertEqual(body['message'], "Course created successfully")
        course = body['course']
        self.assertTrue(course['id'])
        self.assertEqual(course['title'], "Budgeting basics")
        self.assertEqual(course['category'], 'finance')
        self.assertEqual(course['level'], 'beginner')
        self.assertEqual([m['title'] for m in course['modules']], ["Intro", "Reading", "Check yourself"])
        self.assertEqual([m['type'] for m in course['modules']], ['video', 'text', 'quiz'])
        self.assertEqual(self.count_courses(), 1)

    def test_learner_cannot_create_course(self):
        self.register()
        learner_headers = self.auth_headers(self.token_for())

        response = self.create(headers=learner_headers)

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.get_json()['message'], "Unauthorized")
        self.assertEqual(self.count_courses(), 0)

    def test_missing_token(self):
        response = self.create(headers={})

        self.assertEqual(response.status_code, 401)
        self.assertEqual(self.count_courses(), 0)

    def test_invalid_course_is_not_stored(self):
        cases = {
            'no title': sample_course(title=""),
            'bad category': sample_course(category='cooking'),
            'bad level': sample_course(level='expert'),
            'bad module type': sample_course(modules=[{'title': "M", 'content_url': "u", 'type': 'podcast'}]),
            'module without url': sample_course(modules=[{'title': "M", 'type': 'video'}]),
        }
        for name, payload in cases.items():
            with self.subTest(name):
                response = self.create(payload)
                self.assertEqual(response.status_code, 500)
                self.assertEqual(response.get_json()['message'], "Error creating course")
        self.assertEqual(self.count_courses(), 0)

    def test_list_courses_without_token(self):
        self.create()
        self.create(sample_course(title="Using a smartphone", category='tech', level='intermediate', modules=[]))

        response = self.client.get('/api/courses')

        self.assertEqual(response.status_code, 200)
        courses = response.get_json()
        self.assertEqual(len(courses), 2)
        self.assertEqual({c['title'] for c in courses}, {"Budgeting basics", "Using a smartphone"})
        for course in courses:
            self.assertEqual(set(course), {'id', 'title', 'description', 'category', 'level', 'modules'})

    def test_list_empty(self):
        response = self.client.get('/api/courses')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json(), [])

    def test_course_detail(self):
        created = self.create().get_json()['course']

        response = self.client.get(f"/api/courses/{created['id']}")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json(), created)

    def test_course_detail_not_found(self):
        response = self.client.get('/api/courses/missing')

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()['message'], "Course not found")

    def test_no_update_or_delete(self):
        course_id = self.create().get_json()['course']['id']

        self.assertEqual(self.client.put(f"/api/courses/{course_id}", json={}, headers=self.admin_headers).status_code, 405)
        self.assertEqual(self.client.delete(f"/api/courses/{course_id}", headers=self.admin_headers).status_code, 405)
        self.assertEqual(self.count_courses(), 1)

    def test_enroll_in_created_course(self):
        course_id = self.create().get_json()['course']['id']
        self.register()
        headers = self.auth_headers(self.token_for())

        response = self.client.put('/api/profile', json={'courseId': course_id}, headers=headers)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['user']['courses_completed'], [course_id])


if __name__ == '__main__':
    unittest.main()
