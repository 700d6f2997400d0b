import os
from datetime import date, datetime, timedelta, timezone

import pytest

# ✅ 앱 import 전에 필수 환경변수 지정 (설정 객체가 import 시점에 생성됨)
os.environ.setdefault("DB_USER", "test")
os.environ.setdefault("DB_PASSWORD", "test")
os.environ.setdefault("DB_HOST", "localhost")
os.environ.setdefault("DB_NAME", "test")
os.environ.setdefault("SQLITE_PATH", ":memory:")
os.environ.setdefault("JWT_SECRET", "test-access-secret")
os.environ.setdefault("JWT_REFRESH_SECRET", "test-refresh-secret")

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from database.db import Base, get_db
from main import app
from models import (  # noqa: F401
    academic_years, assignments, attendance, classes, exams, grades,
    grading, report_cards, schools, subjects, transcripts, users,
)
from models.academic_years import AcademicYear
from models.assignments import Assignment, Submission
from models.classes import Class, ClassSubject
from models.enums import ExamType, SubmissionStatus, UserRole
from models.exams import Exam, ExamResult
from models.grading import GradeBoundary, GradingScheme
from models.schools import School
from models.subjects import Subject
from models.users import User
from utils.security import create_access_token, hash_password


# ==========================================================
# [공통] DB / 클라이언트
# ==========================================================

@pytest.fixture
def engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def auth_header(user: User) -> dict:
    token = create_access_token(user.id, user.email, user.role.value)
    return {"Authorization": f"Bearer {token}"}


# ==========================================================
# [기본 데이터] 학교 1 / 학년도 1 / 학급 1 / 과목 2 / 교사 1 / 학생 2
# ==========================================================

class SchoolSetup:
    def __init__(self, db):
        self.db = db
        self.school = School(
            name="Green Hill School", code="GHS", email="office@ghs.test",
            address="1 Hill Road", city="Nairobi", country="Kenya",
        )
        db.add(self.school)
        db.flush()

        self.year = AcademicYear(
            name="2025/2026", start_date=date(2025, 9, 1), end_date=date(2026, 7, 31),
            is_current=True, school_id=self.school.id,
        )
        db.add(self.year)
        db.flush()

        self.klass = Class(
            name="Form 2 East", code="F2E", grade_level="Form 2",
            school_id=self.school.id, academic_year_id=self.year.id,
        )
        self.math = Subject(name="Mathematics", code="MATH", school_id=self.school.id)
        self.english = Subject(name="English", code="ENG", school_id=self.school.id)
        db.add_all([self.klass, self.math, self.english])
        db.flush()
        db.add_all([
            ClassSubject(class_id=self.klass.id, subject_id=self.math.id),
            ClassSubject(class_id=self.klass.id, subject_id=self.english.id),
        ])

        self.teacher = self.add_user("teacher@ghs.test", UserRole.TEACHER)
        self.student = self.add_user("amina@ghs.test", UserRole.STUDENT, class_id=self.klass.id)
        self.other_student = self.add_user("brian@ghs.test", UserRole.STUDENT, class_id=self.klass.id)
        db.commit()

    def add_user(self, email, role, class_id=None) -> User:
        user = User(
            email=email, password_hash=hash_password("password123"), role=role,
            first_name=email.split("@")[0].title(), last_name="Test",
            school_id=self.school.id, class_id=class_id,
        )
        self.db.add(user)
        self.db.flush()
        return user

    def add_scheme(self, boundaries, is_default=True, name="Standard") -> GradingScheme:
        scheme = GradingScheme(name=name, is_default=is_default, school_id=self.school.id)
        scheme.boundaries = [
            GradeBoundary(grade=g, min_score=lo, max_score=hi, grade_point=gp, pass_status=passed)
            for g, lo, hi, gp, passed in boundaries
        ]
        self.db.add(scheme)
        self.db.commit()
        return scheme

    def add_graded_submission(self, student, subject, points, total_points=100, status=SubmissionStatus.GRADED):
        assignment = Assignment(
            title=f"{subject.code} homework", total_points=total_points,
            due_date=datetime.now(timezone.utc) + timedelta(days=7),
            class_id=self.klass.id, subject_id=subject.id, created_by_id=self.teacher.id,
        )
        self.db.add(assignment)
        self.db.flush()
        submission = Submission(
            assignment_id=assignment.id, student_id=student.id, status=status, points=points,
        )
        self.db.add(submission)
        self.db.commit()
        return submission

    def add_exam_result(self, student, subject, score, total_marks=100):
        now = datetime.now(timezone.utc)
        exam = Exam(
            title=f"{subject.code} midterm", exam_type=ExamType.MIDTERM, total_marks=total_marks,
            start_time=now, end_time=now + timedelta(hours=1),
            class_id=self.klass.id, subject_id=subject.id, created_by_id=self.teacher.id,
        )
        self.db.add(exam)
        self.db.flush()
        result = ExamResult(
            exam_id=exam.id, student_id=student.id, score=score, total_marks=total_marks,
            percentage=score / total_marks * 100,
        )
        self.db.add(result)
        self.db.commit()
        return result


# 문자 등급 기준 (A/B/C/F)
LETTER_BOUNDARIES = [
    ("A", 90, 100, 4.0, True),
    ("B", 80, 89.99, 3.0, True),
    ("C", 50, 79.99, 2.0, True),
    ("F", 0, 49.99, 0.0, False),
]


@pytest.fixture
def setup(db):
    return SchoolSetup(db)


@pytest.fixture
def teacher_headers(setup):
    return auth_header(setup.teacher)


@pytest.fixture
def student_headers(setup):
    return auth_header(setup.student)
