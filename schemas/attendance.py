from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field

from models.enums import AttendanceStatus
from schemas.common import ORMModel


class AttendanceMark(BaseModel):
    student_id: int
    class_id: int
    date: date
    status: AttendanceStatus
    remarks: Optional[str] = None


class AttendanceOut(AttendanceMark, ORMModel):
    id: int
    marked_by_id: int


# ✅ 월별 출결 요약 재계산 요청
class AttendanceSummaryRequest(BaseModel):
    student_id: int
    class_id: int
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=2000)


class AttendanceSummaryOut(ORMModel):
    id: int
    student_id: int
    class_id: int
    month: int
    year: int
    total_days: int
    present_days: int
    absent_days: int
    late_days: int
    excused_days: int
    attendance_rate: float
    created_at: Optional[datetime] = None
