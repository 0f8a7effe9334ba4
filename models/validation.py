"""Input checks applied before anything is written to the store.

Each validator returns a :class:`ValidationResult` instead of raising, so the
request handlers decide how a failure is reported.
"""

from .models import CourseCategory, CourseLevel, ModuleType, enum_values


class ValidationResult:
    def __init__(self, ok, data=None, errors=None):
        self.ok = ok
        self.data = data or {}
        self.errors = errors or []

    @classmethod
    def success(cls, data):
        return cls(True, data=data)

    @classmethod
    def failure(cls, *errors):
        return cls(False, errors=list(errors))

    @property
    def message(self):
        return '; '.join(self.errors)

    def __bool__(self):
        return self.ok

    def __repr__(self):
        if self.ok:
            return f"ValidationResult(ok, data={self.data!r})"
        return f"ValidationResult(failed, errors={self.errors!r})"


class ValidationError(Exception):
    def __init__(self, result):
        super().__init__(result.message)
        self.result = result


def _is_text(value):
    return isinstance(value, str) and value.strip() != ''


def _missing(payload, fields):
    return [f"{field} is required" for field in fields if not _is_text(payload.get(field))]


def _optional_text(payload, field, errors):
    value = payload.get(field)
    if value is not None and not isinstance(value, str):
        errors.append(f"{field} must be a string")
    return value


def _check_choice(value, enum_cls, field, errors):
    if value is None or value == '':
        errors.append(f"{field} is required")
    elif value not in enum_values(enum_cls):
        errors.append(f"{field} must be one of: {', '.join(enum_values(enum_cls))}")


def validate_registration(payload):
    if not isinstance(payload, dict):
        return ValidationResult.failure("Request body must be a JSON object")

    errors = _missing(payload, ['name', 'email', 'password'])
    phone = _optional_text(payload, 'phone', errors)
    address = _optional_text(payload, 'address', errors)
    if errors:
        return ValidationResult.failure(*errors)

    return ValidationResult.success({
        'name': payload['name'].strip(),
        'email': payload['email'].strip(),
        'password': payload['password'],
        'phone': phone,
        'address': address,
    })


def validate_login(payload):
    if not isinstance(payload, dict):
        return ValidationResult.failure("Request body must be a JSON object")

    errors = _missing(payload, ['email', 'password'])
    if errors:
        return ValidationResult.failure(*errors)
    return ValidationResult.success({
        'email': payload['email'].strip(),
        'password': payload['password'],
    })


def validate_module(module, index):
    prefix = f"modules[{index}]"
    if not isinstance(module, dict):
        return [f"{prefix} must be an object"]

    errors = [f"{prefix}.{message}" for message in _missing(module, ['title', 'content_url'])]
    type_errors = []
    _check_choice(module.get('type'), ModuleType, 'type', type_errors)
    errors.extend(f"{prefix}.{message}" for message in type_errors)
    return errors


def validate_course(payload):
    if not isinstance(payload, dict):
        return ValidationResult.failure("Request body must be a JSON object")

    errors = _missing(payload, ['title'])
    description = _optional_text(payload, 'description', errors)
    _check_choice(payload.get('category'), CourseCategory, 'category', errors)
    _check_choice(payload.get('level'), CourseLevel, 'level', errors)

    modules = payload.get('modules')
    if modules is None:
        modules = []
    if not isinstance(modules, list):
        errors.append("modules must be a list")
        modules = []
    for index, module in enumerate(modules):
        errors.extend(validate_module(module, index))

    if errors:
        return ValidationResult.failure(*errors)

    return ValidationResult.success({
        'title': payload['title'].strip(),
        'description': description,
        'category': payload['category'],
        'level': payload['level'],
        'modules': [
            {
                'title': module['title'].strip(),
                'content_url': module['content_url'].strip(),
                'type': module['type'],
            }
            for module in modules
        ],
    })


def validate_enrollment(payload):
    if not isinstance(payload, dict):
        return ValidationResult.failure("Request body must be a JSON object")

    errors = _missing(payload, ['courseId'])
    if errors:
        return ValidationResult.failure(*errors)
    return ValidationResult.success({'course_id': payload['courseId'].strip()})
