from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from models.enums import ExamType, ExamStatus
from schemas.common import ORMModel


class ExamCreate(BaseModel):
    title: str
    description: Optional[str] = None
    exam_type: ExamType
    total_marks: int = Field(default=100, gt=0)
    passing_marks: Optional[int] = Field(default=None, ge=0)
    duration: int = Field(default=60, gt=0)          # 분
    start_time: datetime
    end_time: datetime
    status: ExamStatus = ExamStatus.SCHEDULED
    class_id: int
    subject_id: int

    @model_validator(mode="after")
    def _check_time(self):
        if self.end_time <= self.start_time:
            raise ValueError("End time must be after start time")
        return self


class ExamOut(ORMModel):
    id: int
    title: str
    exam_type: ExamType
    total_marks: int
    passing_marks: Optional[int] = None
    start_time: datetime
    end_time: datetime
    status: ExamStatus
    class_id: int
    subject_id: int
    created_by_id: int


# ✅ 시험 결과 입력
class ExamResultCreate(BaseModel):
    student_id: int
    score: int


class ExamResultOut(ORMModel):
    id: int
    exam_id: int
    student_id: int
    score: int
    total_marks: int
    percentage: float
    passed: bool
    submitted_at: Optional[datetime] = None
