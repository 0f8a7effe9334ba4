import logging

import requests

from .client import ApiError

logger = logging.getLogger(__name__)

TITLE = "Disha Shakti Platform"


class DashboardState:
    def __init__(self, user=None, courses=None, loading=True):
        self.user = user
        self.courses = courses if courses is not None else []
        self.loading = loading

    def __repr__(self):
        return f"DashboardState(user={self.user!r}, courses={len(self.courses)}, loading={self.loading})"


def load_dashboard(client):
    """Fetch what the landing view needs.

    A rejected profile fetch drops the stored token. A failed course fetch
    leaves the course list empty.
    """
    state = DashboardState()

    if client.token:
        try:
            state.user = client.get_profile()
        except (ApiError, requests.RequestException) as e:
            logger.warning("Error fetching profile: %s", e)
            client.token_store.clear()

    try:
        state.courses = client.list_courses() or []
    except (ApiError, requests.RequestException) as e:
        logger.warning("Error fetching courses: %s", e)
        state.courses = []
    state.loading = False
    return state


def enroll_in_course(client, state, course_id):
    try:
        client.update_profile(course_id)
    except (ApiError, requests.RequestException) as e:
        logger.warning("Error enrolling in course: %s", e)
        return False

    if state.user is not None:
        completed = list(state.user.get('courses_completed', []))
        if course_id not in completed:
            completed.append(course_id)
        state.user = dict(state.user, courses_completed=completed)
    return True


def render(state):
    if state.loading:
        return "Loading..."

    lines = [TITLE]
    if state.user:
        lines.append(f"Welcome, {state.user.get('name')}")
        lines.append(f"Email: {state.user.get('email')}")
        lines.append("Available Courses:")
        completed = set(state.user.get('courses_completed', []))
        for course in state.courses:
            marker = '[x]' if course.get('id') in completed else '[ ]'
            lines.append(f"  {marker} {course.get('title')} - {course.get('description') or ''} ({course.get('id')})")
    else:
        lines.append("Please login or register to access the platform.")
    return '\n'.join(lines)
