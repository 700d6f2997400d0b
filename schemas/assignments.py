from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from models.enums import AssignmentStatus, SubmissionStatus
from schemas.common import ORMModel


class AssignmentCreate(BaseModel):
    title: str
    description: Optional[str] = None
    total_points: int = Field(default=100, gt=0)     # 만점 (0 불가)
    passing_points: Optional[int] = Field(default=None, ge=0)
    due_date: datetime
    allow_late_submission: bool = True
    late_penalty: Optional[float] = Field(default=None, ge=0, le=100)
    status: AssignmentStatus = AssignmentStatus.PUBLISHED
    class_id: int
    subject_id: int


class AssignmentOut(AssignmentCreate, ORMModel):
    id: int
    created_by_id: int


# ✅ 학생 제출
class SubmissionCreate(BaseModel):
    student_id: int
    content: Optional[str] = None


# ✅ 교사 채점
class SubmissionGrade(BaseModel):
    points: int
    feedback: Optional[str] = None


class SubmissionOut(ORMModel):
    id: int
    assignment_id: int
    student_id: int
    status: SubmissionStatus
    content: Optional[str] = None
    submitted_at: Optional[datetime] = None
    is_late: bool
    points: Optional[int] = None
    feedback: Optional[str] = None
    graded_at: Optional[datetime] = None
    graded_by_id: Optional[int] = None
