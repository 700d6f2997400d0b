from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Float, Date, DateTime, Enum, ForeignKey, UniqueConstraint
from database.db import Base
from models.enums import AttendanceStatus

class Attendance(Base):
    __tablename__ = "attendance"  # 출결 기록 테이블
    __table_args__ = (UniqueConstraint("student_id", "class_id", "date", name="uq_attendance_student_class_date"),)

    id = Column(Integer, primary_key=True, index=True)                        # 출결 고유 ID (Primary Key)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)                                      # 날짜
    status = Column(Enum(AttendanceStatus), nullable=False)                  # 출결 상태
    remarks = Column(String(200))                                            # 사유
    marked_by_id = Column(Integer, ForeignKey("users.id"), nullable=False)   # 기록한 교사


class AttendanceSummary(Base):
    __tablename__ = "attendance_summaries"  # 월별 출결 요약 테이블
    __table_args__ = (UniqueConstraint("student_id", "class_id", "month", "year", name="uq_attendance_summary_month"),)

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False, index=True)
    month = Column(Integer, nullable=False)                                  # 월 (1~12)
    year = Column(Integer, nullable=False)                                   # 연도
    total_days = Column(Integer, nullable=False, default=0)
    present_days = Column(Integer, nullable=False, default=0)                # 출석 (지각 포함)
    absent_days = Column(Integer, nullable=False, default=0)
    late_days = Column(Integer, nullable=False, default=0)
    excused_days = Column(Integer, nullable=False, default=0)
    attendance_rate = Column(Float, nullable=False, default=0)               # 출석률 (%)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
