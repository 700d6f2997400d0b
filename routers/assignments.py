from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import CurrentUser, get_current_user, require_teacher
from models.enums import UserRole
from schemas.assignments import AssignmentCreate, AssignmentOut, SubmissionCreate, SubmissionGrade, SubmissionOut
from schemas.common import ok
from services.assignment_service import AssignmentService
from utils.exceptions import PermissionDeniedError

router = APIRouter(tags=["과제"])


# ✅ [CREATE] 과제 등록
@router.post("/assignments", status_code=status.HTTP_201_CREATED)
def create_assignment(
    payload: AssignmentCreate,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_teacher),
):
    assignment = AssignmentService(db).create(payload, user.user_id)
    return ok("Assignment created successfully", AssignmentOut.model_validate(assignment).model_dump(mode="json"))


# ✅ [SUBMIT] 과제 제출 (학생은 본인 것만)
@router.post("/assignments/{assignment_id}/submissions", status_code=status.HTTP_201_CREATED)
def submit_assignment(
    assignment_id: int,
    payload: SubmissionCreate,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    if user.role == UserRole.STUDENT and payload.student_id != user.user_id:
        raise PermissionDeniedError("Students can only submit their own work")
    submission = AssignmentService(db).submit(assignment_id, payload)
    return ok("Assignment submitted successfully", SubmissionOut.model_validate(submission).model_dump(mode="json"))


# ✅ [GRADE] 제출물 채점
@router.patch("/submissions/{submission_id}/grade")
def grade_submission(
    submission_id: int,
    payload: SubmissionGrade,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_teacher),
):
    submission = AssignmentService(db).grade(submission_id, payload, user.user_id)
    return ok("Submission graded successfully", SubmissionOut.model_validate(submission).model_dump(mode="json"))
