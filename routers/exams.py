from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import CurrentUser, require_teacher
from schemas.common import ok
from schemas.exams import ExamCreate, ExamOut, ExamResultCreate, ExamResultOut
from services.exam_service import ExamService

router = APIRouter(prefix="/exams", tags=["시험"])


# ✅ [CREATE] 시험 등록
@router.post("", status_code=status.HTTP_201_CREATED)
def create_exam(
    payload: ExamCreate,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_teacher),
):
    exam = ExamService(db).create(payload, user.user_id)
    return ok("Exam created successfully", ExamOut.model_validate(exam).model_dump(mode="json"))


# ✅ [RESULT] 학생 점수 입력 (같은 학생 재입력 시 덮어씀)
@router.post("/{exam_id}/results", status_code=status.HTTP_201_CREATED)
def record_exam_result(
    exam_id: int,
    payload: ExamResultCreate,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_teacher),
):
    result = ExamService(db).record_result(exam_id, payload)
    return ok("Exam result recorded successfully", ExamResultOut.model_validate(result).model_dump(mode="json"))
