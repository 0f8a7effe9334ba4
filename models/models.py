import uuid
from enum import Enum

from sqlalchemy import Column, String, Float, Integer, ForeignKey, JSON, Enum as DbEnum
from sqlalchemy.orm import declarative_base, relationship
from werkzeug.security import generate_password_hash, check_password_hash

Base = declarative_base()


def generate_id():
    return uuid.uuid4().hex


class UserRole(str, Enum):
    LEARNER = 'rural_woman'
    ADMIN = 'admin'


class CourseCategory(str, Enum):
    FINANCE = 'finance'
    TECH = 'tech'


class CourseLevel(str, Enum):
    BEGINNER = 'beginner'
    INTERMEDIATE = 'intermediate'
    ADVANCED = 'advanced'


class ModuleType(str, Enum):
    VIDEO = 'video'
    TEXT = 'text'
    QUIZ = 'quiz'


def enum_values(enum_cls):
    return [member.value for member in enum_cls]


class User(Base):
    __tablename__ = 'users'

    id = Column(String(32), primary_key=True, default=generate_id)
    name = Column(String(120), nullable=False)
    email = Column(String(120), unique=True, nullable=False)
    password_hash = Column(String(256), nullable=False)
    role = Column(DbEnum(*enum_values(UserRole), name='user_roles'), nullable=False,
                  default=UserRole.LEARNER.value)
    phone = Column(String(40))
    address = Column(String(500))
    financial_literacy_level = Column(String(40), nullable=False, default='Beginner')
    tech_skills = Column(JSON, nullable=False, default=list)
    job_preferences = Column(JSON, nullable=False, default=list)
    progress = Column(Float, nullable=False, default=0)
    # weak references to Course.id, not enforced
    courses_completed = Column(JSON, nullable=False, default=list)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def has_completed(self, course_id):
        return course_id in (self.courses_completed or [])

    def complete_course(self, course_id):
        """Append ``course_id`` to the completed courses unless already there.

        Returns True when the list changed. The column is reassigned rather
        than mutated in place so the change is picked up on flush.
        """
        if self.has_completed(course_id):
            return False
        self.courses_completed = list(self.courses_completed or []) + [course_id]
        return True

    def summary(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role,
        }

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role,
            'phone': self.phone,
            'address': self.address,
            'financial_literacy_level': self.financial_literacy_level,
            'tech_skills': list(self.tech_skills or []),
            'job_preferences': list(self.job_preferences or []),
            'progress': self.progress,
            'courses_completed': list(self.courses_completed or []),
        }


class Course(Base):
    __tablename__ = 'courses'

    id = Column(String(32), primary_key=True, default=generate_id)
    title = Column(String(200), nullable=False)
    description = Column(String(1000))
    category = Column(DbEnum(*enum_values(CourseCategory), name='course_categories'), nullable=False)
    level = Column(DbEnum(*enum_values(CourseLevel), name='course_levels'), nullable=False)

    modules = relationship(
        'CourseModule',
        order_by='CourseModule.order',
        cascade='all, delete-orphan',
        lazy='selectin',
    )

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'category': self.category,
            'level': self.level,
            'modules': [module.to_dict() for module in self.modules],
        }


class CourseModule(Base):
    __tablename__ = 'course_modules'

    id = Column(String(32), primary_key=True, default=generate_id)
    course_id = Column(String(32), ForeignKey('courses.id'), nullable=False)
    title = Column(String(200), nullable=False)
    content_url = Column(String(500), nullable=False)  # video or text link
    type = Column(DbEnum(*enum_values(ModuleType), name='module_types'), nullable=False)
    order = Column(Integer, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'content_url': self.content_url,
            'type': self.type,
        }
