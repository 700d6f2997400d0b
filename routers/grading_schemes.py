from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import CurrentUser, get_current_user, require_school_admin
from schemas.common import ok
from schemas.grading import GradingSchemeCreate, GradingSchemeOut, GradingSchemeUpdate
from services.grading_scheme_service import GradingSchemeService

router = APIRouter(tags=["등급기준"])


def _scheme(scheme) -> dict:
    return GradingSchemeOut.model_validate(scheme).model_dump(mode="json")


# ✅ [CREATE] 등급 기준 + 구간 등록
@router.post("/grading-schemes", status_code=status.HTTP_201_CREATED)
def create_grading_scheme(
    payload: GradingSchemeCreate,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_school_admin),
):
    return ok("Grading scheme created successfully", _scheme(GradingSchemeService(db).create(payload)))


# ✅ [READ] 학교별 등급 기준 목록 (기본 기준 먼저, 사용 중인 성적 수 포함)
@router.get("/schools/{school_id}/grading-schemes")
def list_grading_schemes(
    school_id: int,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    rows = GradingSchemeService(db).list_for_school(school_id)
    return ok("Grading schemes retrieved successfully", [
        {**_scheme(row["scheme"]), "grade_count": row["grade_count"]} for row in rows
    ])


@router.get("/grading-schemes/{scheme_id}")
def get_grading_scheme(
    scheme_id: int,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    return ok("Grading scheme retrieved successfully", _scheme(GradingSchemeService(db).get(scheme_id)))


@router.put("/grading-schemes/{scheme_id}")
def update_grading_scheme(
    scheme_id: int,
    payload: GradingSchemeUpdate,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_school_admin),
):
    return ok("Grading scheme updated successfully", _scheme(GradingSchemeService(db).update(scheme_id, payload)))


@router.delete("/grading-schemes/{scheme_id}")
def delete_grading_scheme(
    scheme_id: int,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_school_admin),
):
    GradingSchemeService(db).delete(scheme_id)
    return ok("Grading scheme deleted successfully")
