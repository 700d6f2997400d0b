import logging
from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from models.grades import Grade
from models.grading import GradeBoundary, GradingScheme
from models.schools import School
from schemas.grading import BoundaryIn, GradingSchemeCreate, GradingSchemeUpdate
from services.grade_boundary import find_overlaps
from services.common import require
from utils.exceptions import InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)


def validate_boundaries(boundaries: List[BoundaryIn]):
    if not boundaries:
        raise InvalidInputError("At least one grade boundary is required")
    bad = [b.grade for b in boundaries if b.min_score > b.max_score]
    if bad:
        raise InvalidInputError(
            f"Boundary min_score must not exceed max_score: {', '.join(bad)}",
            errors=[{"field": "boundaries", "message": f"invalid range for grade {g}"} for g in bad],
        )


class GradingSchemeService:
    def __init__(self, db: Session):
        self.db = db

    def _unset_other_defaults(self, school_id: int, keep_id=None):
        # 학교별 기본 기준은 1개만 유지
        query = self.db.query(GradingScheme).filter(
            GradingScheme.school_id == school_id, GradingScheme.is_default.is_(True)
        )
        if keep_id is not None:
            query = query.filter(GradingScheme.id != keep_id)
        for other in query.all():
            other.is_default = False
            logger.info(f"기본 등급 기준 해제: scheme={other.id} school={school_id}")

    def _build_boundaries(self, scheme: GradingScheme, boundaries: List[BoundaryIn]):
        scheme.boundaries = [GradeBoundary(**b.model_dump()) for b in boundaries]
        overlaps = find_overlaps(scheme.boundaries)
        if overlaps:
            # 저장은 허용 (겹치면 최소 점수가 높은 구간 우선)
            logger.warning(f"등급 구간 겹침: scheme='{scheme.name}' pairs={overlaps}")

    def create(self, data: GradingSchemeCreate) -> GradingScheme:
        require(self.db, School, data.school_id, "School")
        validate_boundaries(data.boundaries)

        if data.is_default:
            self._unset_other_defaults(data.school_id)

        scheme = GradingScheme(
            name=data.name,
            description=data.description,
            scale=data.scale,
            is_default=data.is_default,
            school_id=data.school_id,
        )
        self._build_boundaries(scheme, data.boundaries)
        self.db.add(scheme)
        self.db.commit()
        self.db.refresh(scheme)
        return scheme

    def list_for_school(self, school_id: int) -> List[dict]:
        schemes = (
            self.db.query(GradingScheme)
            .options(selectinload(GradingScheme.boundaries))
            .filter(GradingScheme.school_id == school_id)
            .order_by(GradingScheme.is_default.desc(), GradingScheme.id)
            .all()
        )
        usage = dict(
            self.db.query(Grade.scheme_id, func.count(Grade.id))
            .filter(Grade.scheme_id.in_([s.id for s in schemes]))
            .group_by(Grade.scheme_id)
            .all()
        ) if schemes else {}
        return [{"scheme": s, "grade_count": usage.get(s.id, 0)} for s in schemes]

    def get(self, scheme_id: int) -> GradingScheme:
        scheme = (
            self.db.query(GradingScheme)
            .options(selectinload(GradingScheme.boundaries))
            .filter(GradingScheme.id == scheme_id)
            .first()
        )
        if scheme is None:
            raise NotFoundError("Grading scheme")
        return scheme

    def update(self, scheme_id: int, data: GradingSchemeUpdate) -> GradingScheme:
        scheme = self.get(scheme_id)
        changes = data.model_dump(exclude_unset=True, exclude={"boundaries"})

        if changes.get("is_default"):
            self._unset_other_defaults(scheme.school_id, keep_id=scheme.id)
        for key, value in changes.items():
            if value is not None:
                setattr(scheme, key, value)

        if data.boundaries is not None:
            validate_boundaries(data.boundaries)
            self._build_boundaries(scheme, data.boundaries)

        self.db.commit()
        self.db.refresh(scheme)
        return scheme

    def delete(self, scheme_id: int):
        scheme = self.get(scheme_id)
        # 이 기준으로 산출된 성적은 기준 참조만 끊음 (등급 값은 유지)
        self.db.query(Grade).filter(Grade.scheme_id == scheme_id).update(
            {Grade.scheme_id: None}, synchronize_session=False
        )
        self.db.delete(scheme)
        self.db.commit()
