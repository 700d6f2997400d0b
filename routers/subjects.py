from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import CurrentUser, require_school_admin
from schemas.common import ok
from schemas.subjects import SubjectCreate, SubjectOut
from services.school_service import SchoolService

router = APIRouter(prefix="/subjects", tags=["과목"])


# ✅ [CREATE] 과목 등록
@router.post("", status_code=status.HTTP_201_CREATED)
def create_subject(
    payload: SubjectCreate,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_school_admin),
):
    subject = SchoolService(db).create_subject(payload)
    return ok("Subject created successfully", SubjectOut.model_validate(subject).model_dump(mode="json"))
