"""
services/academic_year_service.py

학년도/학기 관리.
"현재" 학년도(학교별)와 "현재" 학기(학년도별)는 전역 상태가 아니라
쓰기 시점에 유일성을 맞춘다: 하나를 현재로 지정하면 같은 상위 범위의 나머지는 해제.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from models.academic_years import AcademicYear, Term
from models.schools import School
from schemas.academic_years import AcademicYearCreate, TermCreate
from services.common import require
from utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class AcademicYearService:
    def __init__(self, db: Session):
        self.db = db

    # ==========================================================
    # [학년도]
    # ==========================================================
    def create_year(self, data: AcademicYearCreate) -> AcademicYear:
        require(self.db, School, data.school_id, "School")
        year = AcademicYear(**data.model_dump(exclude={"is_current"}), is_current=False)
        self.db.add(year)
        self.db.flush()
        if data.is_current:
            self._mark_current_year(year)
        self.db.commit()
        self.db.refresh(year)
        return year

    def set_current_year(self, year_id: int) -> AcademicYear:
        year = require(self.db, AcademicYear, year_id, "Academic year")
        self._mark_current_year(year)
        self.db.commit()
        self.db.refresh(year)
        return year

    def _mark_current_year(self, year: AcademicYear):
        (
            self.db.query(AcademicYear)
            .filter(AcademicYear.school_id == year.school_id, AcademicYear.id != year.id)
            .update({AcademicYear.is_current: False}, synchronize_session="fetch")
        )
        year.is_current = True
        logger.info(f"현재 학년도 지정: year={year.id} school={year.school_id}")

    def current_year(self, school_id: int) -> AcademicYear:
        year = (
            self.db.query(AcademicYear)
            .filter(AcademicYear.school_id == school_id, AcademicYear.is_current.is_(True))
            .first()
        )
        if year is None:
            raise NotFoundError("Current academic year")
        return year

    # ==========================================================
    # [학기]
    # ==========================================================
    def create_term(self, year_id: int, data: TermCreate) -> Term:
        require(self.db, AcademicYear, year_id, "Academic year")
        term = Term(**data.model_dump(exclude={"is_current"}), is_current=False, academic_year_id=year_id)
        self.db.add(term)
        self.db.flush()
        if data.is_current:
            self._mark_current_term(term)
        self.db.commit()
        self.db.refresh(term)
        return term

    def set_current_term(self, term_id: int) -> Term:
        term = require(self.db, Term, term_id, "Term")
        self._mark_current_term(term)
        self.db.commit()
        self.db.refresh(term)
        return term

    def _mark_current_term(self, term: Term):
        (
            self.db.query(Term)
            .filter(Term.academic_year_id == term.academic_year_id, Term.id != term.id)
            .update({Term.is_current: False}, synchronize_session="fetch")
        )
        term.is_current = True

    def current_term(self, year_id: int) -> Optional[Term]:
        return (
            self.db.query(Term)
            .filter(Term.academic_year_id == year_id, Term.is_current.is_(True))
            .first()
        )
