from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from models.enums import TermType
from schemas.common import ORMModel


# ✅ 성적표 생성 요청
class ReportCardGenerateRequest(BaseModel):
    student_id: int
    class_id: int
    academic_year_id: int
    term_type: TermType
    term_id: Optional[int] = None
    class_teacher_comment: Optional[str] = None
    principal_comment: Optional[str] = None


class ReportCardOut(ORMModel):
    id: int
    student_id: int
    class_id: int
    academic_year_id: int
    term_id: Optional[int] = None
    term_type: TermType
    total_marks: float
    max_marks: float
    average_score: float
    overall_grade: Optional[str] = None
    overall_gpa: Optional[float] = None
    position: Optional[int] = None
    out_of: Optional[int] = None
    total_days: int
    days_present: int
    days_absent: int
    attendance_rate: float
    class_teacher_comment: Optional[str] = None
    principal_comment: Optional[str] = None
    is_published: bool
    published_at: Optional[datetime] = None
    generated_by: Optional[int] = None
    updated_at: Optional[datetime] = None
