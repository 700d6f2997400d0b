from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import CurrentUser, get_current_user, require_teacher
from models.enums import TermType
from schemas.common import ok
from schemas.grades import (
    GradeCalculateAllRequest, GradeCalculateRequest, GradeLockRequest, GradeOut, GradeRemarksRequest,
)
from services.grade_service import GradeService

router = APIRouter(tags=["성적"])


def _grades(grades) -> List[dict]:
    return [GradeOut.model_validate(g).model_dump(mode="json") for g in grades]


# ==========================================================
# [1단계] 성적 산출
# ==========================================================

# ✅ 과목 1개 성적 산출 (과제 40% + 시험 60%)
@router.post("/grades/calculate", status_code=status.HTTP_201_CREATED)
def calculate_grade(
    payload: GradeCalculateRequest,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_teacher),
):
    grade = GradeService(db).calculate_grade(payload)
    return ok("Grade calculated successfully", GradeOut.model_validate(grade).model_dump(mode="json"))


# ✅ 학급 편성 과목 전체 산출 (잠긴 성적은 유지)
@router.post("/students/{student_id}/grades/calculate-all", status_code=status.HTTP_201_CREATED)
def calculate_all_grades(
    student_id: int,
    payload: GradeCalculateAllRequest,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_teacher),
):
    grades = GradeService(db).calculate_all(
        student_id, payload.class_id, payload.academic_year_id, payload.term_type, payload.term_id
    )
    return ok(f"Calculated {len(grades)} grades", _grades(grades))


# ==========================================================
# [2단계] 조회
# ==========================================================

@router.get("/students/{student_id}/grades")
def get_student_grades(
    student_id: int,
    academic_year_id: Optional[int] = None,
    term_type: Optional[TermType] = None,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    grades = GradeService(db).get_student_grades(student_id, academic_year_id, term_type)
    return ok("Student grades retrieved successfully", _grades(grades))


# ✅ 반 성적 (총점 내림차순)
@router.get("/classes/{class_id}/grades")
def get_class_grades(
    class_id: int,
    academic_year_id: int,
    term_type: TermType,
    subject_id: Optional[int] = None,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    grades = GradeService(db).get_class_grades(class_id, academic_year_id, term_type, subject_id)
    return ok("Class grades retrieved successfully", _grades(grades))


@router.get("/grades/{grade_id}")
def get_grade(
    grade_id: int,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    grade = GradeService(db).get_grade(grade_id)
    return ok("Grade retrieved successfully", GradeOut.model_validate(grade).model_dump(mode="json"))


# ==========================================================
# [3단계] 잠금 / 비고
# ==========================================================

@router.patch("/grades/{grade_id}/lock")
def lock_grade(
    grade_id: int,
    payload: GradeLockRequest,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_teacher),
):
    grade = GradeService(db).set_lock(grade_id, payload.is_locked)
    message = "Grade locked" if grade.is_locked else "Grade unlocked"
    return ok(message, GradeOut.model_validate(grade).model_dump(mode="json"))


@router.patch("/grades/{grade_id}/remarks")
def update_grade_remarks(
    grade_id: int,
    payload: GradeRemarksRequest,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_teacher),
):
    grade = GradeService(db).update_remarks(grade_id, payload.remarks)
    return ok("Grade remarks updated", GradeOut.model_validate(grade).model_dump(mode="json"))
