from typing import Optional

from pydantic import BaseModel, Field

from models.enums import SubjectCategory
from schemas.common import ORMModel


class SubjectCreate(BaseModel):
    name: str                                        # 과목 이름
    code: str                                        # 과목 코드
    category: SubjectCategory = SubjectCategory.CORE # 과목 분류
    credits: Optional[int] = Field(default=None, ge=0)
    school_id: int


class SubjectOut(SubjectCreate, ORMModel):
    id: int
