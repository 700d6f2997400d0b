from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, Float, Boolean, DateTime, Enum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from database.db import Base
from models.enums import AssignmentStatus, SubmissionStatus

class Assignment(Base):
    __tablename__ = "assignments"  # 과제 테이블

    id = Column(Integer, primary_key=True, index=True)                        # 과제 고유 ID
    title = Column(String(200), nullable=False)                              # 과제명
    description = Column(Text)                                               # 과제 설명
    total_points = Column(Integer, nullable=False, default=100)              # 만점
    passing_points = Column(Integer)                                         # 통과 점수
    due_date = Column(DateTime, nullable=False)                              # 마감 일시
    allow_late_submission = Column(Boolean, nullable=False, default=True)    # 지각 제출 허용 여부
    late_penalty = Column(Float)                                             # 지각 감점 비율 (%, 채점 시 적용)
    status = Column(Enum(AssignmentStatus), nullable=False, default=AssignmentStatus.DRAFT)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False, index=True)
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False, index=True)
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    # ✅ 과제 ↔ 제출물 (1:N)
    submissions = relationship("Submission", back_populates="assignment", cascade="all, delete-orphan")


class Submission(Base):
    __tablename__ = "submissions"  # 과제 제출 테이블
    __table_args__ = (UniqueConstraint("assignment_id", "student_id", name="uq_submission_assignment_student"),)

    id = Column(Integer, primary_key=True, index=True)
    assignment_id = Column(Integer, ForeignKey("assignments.id"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(Enum(SubmissionStatus), nullable=False, default=SubmissionStatus.NOT_SUBMITTED)
    content = Column(Text)                                                   # 제출 내용
    submitted_at = Column(DateTime)                                          # 제출 시각
    is_late = Column(Boolean, nullable=False, default=False)                 # 지각 제출 여부
    points = Column(Integer)                                                 # 획득 점수 (채점 후)
    feedback = Column(Text)                                                  # 교사 피드백
    graded_at = Column(DateTime)
    graded_by_id = Column(Integer, ForeignKey("users.id"))

    assignment = relationship("Assignment", back_populates="submissions")
