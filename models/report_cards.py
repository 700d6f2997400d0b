from datetime import datetime, timezone

from sqlalchemy import Column, Integer, Float, String, Text, Boolean, DateTime, Enum, ForeignKey, UniqueConstraint
from database.db import Base
from models.enums import TermType

class ReportCard(Base):
    __tablename__ = "report_cards"  # 학기별 성적표 테이블
    __table_args__ = (
        UniqueConstraint("student_id", "academic_year_id", "term_type", name="uq_report_card_student_year_term"),
    )

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False, index=True)
    academic_year_id = Column(Integer, ForeignKey("academic_years.id"), nullable=False, index=True)
    term_id = Column(Integer, ForeignKey("terms.id"), index=True)
    term_type = Column(Enum(TermType), nullable=False)

    # 성적 집계
    total_marks = Column(Float, nullable=False, default=0)
    max_marks = Column(Float, nullable=False, default=0)
    average_score = Column(Float, nullable=False, default=0)
    overall_grade = Column(String(10))
    overall_gpa = Column(Float)
    position = Column(Integer)                                               # 반 석차
    out_of = Column(Integer)                                                 # 석차 모수

    # 출결 스냅샷
    total_days = Column(Integer, nullable=False, default=0)
    days_present = Column(Integer, nullable=False, default=0)
    days_absent = Column(Integer, nullable=False, default=0)
    attendance_rate = Column(Float, nullable=False, default=0)

    class_teacher_comment = Column(Text)
    principal_comment = Column(Text)

    # 공개 상태 (공개 취소 없음)
    is_published = Column(Boolean, nullable=False, default=False)
    published_at = Column(DateTime)
    generated_by = Column(Integer, ForeignKey("users.id"))                   # 공개 처리한 사용자

    version = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc),
                        onupdate=lambda: datetime.now(timezone.utc))

    __mapper_args__ = {"version_id_col": version}
