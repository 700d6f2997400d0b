from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import CurrentUser, require_school_admin
from schemas.common import ok
from schemas.schools import SchoolCreate, SchoolOut
from services.school_service import SchoolService

router = APIRouter(prefix="/schools", tags=["학교"])


# ✅ [CREATE] 학교 등록
@router.post("", status_code=status.HTTP_201_CREATED)
def create_school(
    payload: SchoolCreate,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_school_admin),
):
    school = SchoolService(db).create_school(payload)
    return ok("School created successfully", SchoolOut.model_validate(school).model_dump(mode="json"))
