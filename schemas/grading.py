from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from models.enums import GradingScale
from schemas.common import ORMModel


# ==========================================================
# 등급 구간
# ==========================================================

class BoundaryIn(BaseModel):
    grade: str = Field(..., min_length=1, max_length=10)     # 등급 라벨
    min_score: float                                         # 최소 점수 (포함)
    max_score: float                                         # 최대 점수 (포함)
    grade_point: Optional[float] = None                      # 평점
    description: Optional[str] = None
    pass_status: bool = True                                 # 통과 등급 여부


class BoundaryOut(BoundaryIn, ORMModel):
    id: int


# ==========================================================
# 등급 산출 기준 (Grading Scheme)
# ==========================================================

class GradingSchemeCreate(BaseModel):
    name: str
    description: Optional[str] = None
    scale: GradingScale
    is_default: bool = False
    school_id: int
    boundaries: List[BoundaryIn]


class GradingSchemeUpdate(BaseModel):
    """부분 수정 - 지정한 필드만 반영. boundaries 지정 시 전체 교체"""
    name: Optional[str] = None
    description: Optional[str] = None
    scale: Optional[GradingScale] = None
    is_default: Optional[bool] = None
    boundaries: Optional[List[BoundaryIn]] = None


class GradingSchemeOut(ORMModel):
    id: int
    name: str
    description: Optional[str] = None
    scale: GradingScale
    is_default: bool
    school_id: int
    created_at: Optional[datetime] = None
    boundaries: List[BoundaryOut] = []
