from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, Float, Boolean, DateTime, Enum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from database.db import Base
from models.enums import ExamType, ExamStatus

class Exam(Base):
    __tablename__ = "exams"  # 시험 정보 테이블

    id = Column(Integer, primary_key=True, index=True)                        # 시험 고유 ID
    title = Column(String(200), nullable=False)                              # 시험명
    description = Column(Text)
    exam_type = Column(Enum(ExamType), nullable=False)                       # 시험 유형 (중간/기말 등)
    total_marks = Column(Integer, nullable=False, default=100)               # 만점
    passing_marks = Column(Integer)                                          # 통과 점수
    duration = Column(Integer, nullable=False, default=60)                   # 시험 시간 (분)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    status = Column(Enum(ExamStatus), nullable=False, default=ExamStatus.DRAFT)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False, index=True)
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False, index=True)
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    # ✅ 시험 ↔ 응시 결과 (1:N)
    results = relationship("ExamResult", back_populates="exam", cascade="all, delete-orphan")


class ExamResult(Base):
    __tablename__ = "exam_results"  # 시험 결과 테이블
    __table_args__ = (UniqueConstraint("exam_id", "student_id", name="uq_exam_result_exam_student"),)

    id = Column(Integer, primary_key=True, index=True)
    exam_id = Column(Integer, ForeignKey("exams.id"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    score = Column(Integer, nullable=False, default=0)                       # 획득 점수
    total_marks = Column(Integer, nullable=False)                            # 응시 당시 만점
    percentage = Column(Float, nullable=False, default=0)                    # 백분율 점수
    grade = Column(String(10))                                               # 시험 자체 등급 (선택)
    passed = Column(Boolean, nullable=False, default=False)                  # 통과 여부
    submitted_at = Column(DateTime)

    exam = relationship("Exam", back_populates="results")
