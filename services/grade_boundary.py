"""
services/grade_boundary.py

점수 → 등급 변환.
- 기준(scheme) 결정: 명시한 scheme_id → 없으면 학교 기본 기준
- 구간은 min_score 내림차순으로 훑어 처음 포함되는 구간(양 끝 포함)을 사용
  → 구간이 겹치면 최소 점수가 더 높은 쪽이 우선
- 기준이 없거나 맞는 구간이 없으면 등급 없음 + 미통과 (예외 아님)
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from models.classes import Class
from models.grading import GradeBoundary, GradingScheme
from utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedGrade:
    letter_grade: Optional[str] = None
    grade_point: Optional[float] = None
    is_passed: bool = False

    @classmethod
    def from_boundary(cls, boundary: Optional[GradeBoundary]) -> "ResolvedGrade":
        if boundary is None:
            return cls()
        return cls(
            letter_grade=boundary.grade,
            grade_point=boundary.grade_point,
            is_passed=bool(boundary.pass_status),
        )


UNRESOLVED = ResolvedGrade()


def match_boundary(boundaries: Iterable[GradeBoundary], score: float) -> Optional[GradeBoundary]:
    ordered = sorted(boundaries, key=lambda b: b.min_score, reverse=True)
    for boundary in ordered:
        if boundary.min_score <= score <= boundary.max_score:
            return boundary
    return None


def find_overlaps(boundaries: Iterable[GradeBoundary]) -> List[tuple]:
    """겹치는 구간 쌍 전체 (저장은 허용, 경고 로그용)

    min_score 오름차순 정렬 후 모든 쌍을 비교: 넓은 구간 하나가 여러 구간을 덮는 경우도 포함
    """
    ordered = sorted(boundaries, key=lambda b: b.min_score)
    return [
        (low.grade, high.grade)
        for i, low in enumerate(ordered)
        for high in ordered[i + 1:]
        if high.min_score <= low.max_score
    ]


class GradeBoundaryResolver:
    def __init__(self, db: Session):
        self.db = db

    def default_scheme_for_school(self, school_id: int) -> Optional[GradingScheme]:
        return (
            self.db.query(GradingScheme)
            .filter(GradingScheme.school_id == school_id, GradingScheme.is_default.is_(True))
            .order_by(GradingScheme.id)
            .first()
        )

    def resolve_scheme_id(self, class_id: int, scheme_id: Optional[int] = None) -> Optional[int]:
        """명시 scheme_id 검증, 없으면 학급이 속한 학교의 기본 기준 id (없으면 None)"""
        if scheme_id is not None:
            exists = self.db.query(GradingScheme.id).filter(GradingScheme.id == scheme_id).first()
            if exists is None:
                raise NotFoundError("Grading scheme")
            return scheme_id

        school_id = self.db.query(Class.school_id).filter(Class.id == class_id).scalar()
        if school_id is None:
            return None
        scheme = self.default_scheme_for_school(school_id)
        return scheme.id if scheme else None

    def boundaries(self, scheme_id: int) -> List[GradeBoundary]:
        return (
            self.db.query(GradeBoundary)
            .filter(GradeBoundary.scheme_id == scheme_id)
            .order_by(GradeBoundary.min_score.desc())
            .all()
        )

    def resolve(self, scheme_id: Optional[int], score: float) -> ResolvedGrade:
        if scheme_id is None:
            return UNRESOLVED
        boundary = match_boundary(self.boundaries(scheme_id), score)
        if boundary is None:
            logger.debug(f"scheme={scheme_id} 에서 점수 {score} 에 맞는 등급 구간 없음")
        return ResolvedGrade.from_boundary(boundary)
