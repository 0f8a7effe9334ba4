from .client import ApiError, TokenStore, PlatformClient
from .dashboard import DashboardState, load_dashboard, enroll_in_course, render
