from typing import Optional

from pydantic import BaseModel, Field

from schemas.common import ORMModel


class ClassCreate(BaseModel):
    name: str                                # 학급 이름
    code: str                                # 학급 코드
    grade_level: str                         # 학년
    stream: Optional[str] = None             # 분반
    capacity: int = Field(default=40, ge=1)  # 정원
    school_id: int
    academic_year_id: int


class ClassOut(ClassCreate, ORMModel):
    id: int


# ✅ 학급에 과목 편성
class ClassSubjectCreate(BaseModel):
    subject_id: int
    lessons_per_week: Optional[int] = Field(default=None, ge=0)


class ClassSubjectOut(ORMModel):
    id: int
    class_id: int
    subject_id: int
    lessons_per_week: Optional[int] = None
