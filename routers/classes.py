from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import CurrentUser, require_school_admin
from schemas.classes import ClassCreate, ClassOut, ClassSubjectCreate, ClassSubjectOut
from schemas.common import ok
from services.school_service import SchoolService

router = APIRouter(prefix="/classes", tags=["학급"])


# ✅ [CREATE] 학급 등록
@router.post("", status_code=status.HTTP_201_CREATED)
def create_class(
    payload: ClassCreate,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_school_admin),
):
    klass = SchoolService(db).create_class(payload)
    return ok("Class created successfully", ClassOut.model_validate(klass).model_dump(mode="json"))


# ✅ [CREATE] 학급에 과목 편성
@router.post("/{class_id}/subjects", status_code=status.HTTP_201_CREATED)
def assign_subject(
    class_id: int,
    payload: ClassSubjectCreate,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_school_admin),
):
    link = SchoolService(db).assign_subject(class_id, payload)
    return ok("Subject assigned to class", ClassSubjectOut.model_validate(link).model_dump(mode="json"))
