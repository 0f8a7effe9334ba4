from .models import (
    Base,
    User,
    Course,
    CourseModule,
    UserRole,
    CourseCategory,
    CourseLevel,
    ModuleType,
    enum_values,
)
from .store import Store, get_store
from .validation import (
    ValidationResult,
    ValidationError,
    validate_registration,
    validate_login,
    validate_course,
    validate_enrollment,
)
