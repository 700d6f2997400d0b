from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import CurrentUser, get_current_user, require_school_admin
from schemas.academic_years import AcademicYearCreate, AcademicYearOut, TermCreate, TermOut
from schemas.common import ok
from services.academic_year_service import AcademicYearService

router = APIRouter(tags=["학사일정"])


def _year(year) -> dict:
    return AcademicYearOut.model_validate(year).model_dump(mode="json")


def _term(term) -> dict:
    return TermOut.model_validate(term).model_dump(mode="json")


# ==========================================================
# [학년도]
# ==========================================================

@router.post("/academic-years", status_code=status.HTTP_201_CREATED)
def create_academic_year(
    payload: AcademicYearCreate,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_school_admin),
):
    return ok("Academic year created successfully", _year(AcademicYearService(db).create_year(payload)))


@router.patch("/academic-years/{year_id}/current")
def set_current_academic_year(
    year_id: int,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_school_admin),
):
    return ok("Current academic year updated", _year(AcademicYearService(db).set_current_year(year_id)))


@router.get("/schools/{school_id}/academic-years/current")
def get_current_academic_year(
    school_id: int,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    service = AcademicYearService(db)
    year = service.current_year(school_id)
    term = service.current_term(year.id)
    return ok("Current academic year retrieved", {
        **_year(year),
        "current_term": _term(term) if term else None,
    })


# ==========================================================
# [학기]
# ==========================================================

@router.post("/academic-years/{year_id}/terms", status_code=status.HTTP_201_CREATED)
def create_term(
    year_id: int,
    payload: TermCreate,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_school_admin),
):
    return ok("Term created successfully", _term(AcademicYearService(db).create_term(year_id, payload)))


@router.patch("/terms/{term_id}/current")
def set_current_term(
    term_id: int,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_school_admin),
):
    return ok("Current term updated", _term(AcademicYearService(db).set_current_term(term_id)))
