from datetime import datetime, timezone

from sqlalchemy import Column, Integer, Float, String, Text, Boolean, DateTime, Enum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from database.db import Base
from models.enums import TermType
from models.subjects import Subject

class Grade(Base):
    __tablename__ = "grades"  # 과목별 학기 성적 테이블
    __table_args__ = (
        UniqueConstraint("student_id", "subject_id", "academic_year_id", "term_type", name="uq_grade_student_subject_year_term"),
    )

    id = Column(Integer, primary_key=True, index=True)                        # 성적 고유 ID (Primary Key)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False, index=True)
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False, index=True)
    academic_year_id = Column(Integer, ForeignKey("academic_years.id"), nullable=False, index=True)
    term_id = Column(Integer, ForeignKey("terms.id"), index=True)
    term_type = Column(Enum(TermType), nullable=False)                       # 학기 구분
    scheme_id = Column(Integer, ForeignKey("grading_schemes.id", ondelete="SET NULL"))

    assignment_score = Column(Float, nullable=False, default=0)              # 과제 평균 (%)
    exam_score = Column(Float, nullable=False, default=0)                    # 시험 평균 (%)
    total_score = Column(Float, nullable=False, default=0)                   # 가중 합산 점수
    max_score = Column(Float, nullable=False, default=100)
    percentage = Column(Float, nullable=False, default=0)
    letter_grade = Column(String(10))                                        # 등급 (예: A, B, C)
    grade_point = Column(Float)                                              # 평점
    remarks = Column(Text)                                                   # 교사 메모 (재산출 시 유지)
    is_passed = Column(Boolean, nullable=False, default=False)
    is_locked = Column(Boolean, nullable=False, default=False)               # 잠금 시 재산출 거부
    version = Column(Integer, nullable=False)                                # 낙관적 잠금용 버전
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc),
                        onupdate=lambda: datetime.now(timezone.utc))

    subject = relationship(Subject)

    __mapper_args__ = {"version_id_col": version}
