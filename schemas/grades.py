from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from models.enums import TermType
from schemas.common import ORMModel


# ✅ 과목 1개 성적 산출 요청
class GradeCalculateRequest(BaseModel):
    student_id: int
    class_id: int
    subject_id: int
    academic_year_id: int
    term_type: TermType
    term_id: Optional[int] = None
    scheme_id: Optional[int] = None      # 미지정 시 학교 기본 기준 사용
    force: bool = False                  # 잠긴 성적도 재산출


# ✅ 학생 전 과목 성적 산출 요청 (student_id 는 경로에서)
class GradeCalculateAllRequest(BaseModel):
    class_id: int
    academic_year_id: int
    term_type: TermType
    term_id: Optional[int] = None


class GradeLockRequest(BaseModel):
    is_locked: bool


class GradeRemarksRequest(BaseModel):
    remarks: Optional[str] = None


class SubjectBrief(ORMModel):
    id: int
    name: str
    code: str


# ✅ 출력용
class GradeOut(ORMModel):
    id: int
    student_id: int
    class_id: int
    subject_id: int
    academic_year_id: int
    term_id: Optional[int] = None
    term_type: TermType
    scheme_id: Optional[int] = None
    assignment_score: float
    exam_score: float
    total_score: float
    max_score: float
    percentage: float
    letter_grade: Optional[str] = None
    grade_point: Optional[float] = None
    remarks: Optional[str] = None
    is_passed: bool
    is_locked: bool
    updated_at: Optional[datetime] = None
    subject: Optional[SubjectBrief] = None
