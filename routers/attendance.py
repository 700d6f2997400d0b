from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import CurrentUser, require_teacher
from schemas.attendance import AttendanceMark, AttendanceOut, AttendanceSummaryOut, AttendanceSummaryRequest
from schemas.common import ok
from services.attendance_service import AttendanceService

router = APIRouter(prefix="/attendance", tags=["출결"])


# ✅ [MARK] 일일 출결 기록
@router.post("", status_code=status.HTTP_201_CREATED)
def mark_attendance(
    payload: AttendanceMark,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_teacher),
):
    record = AttendanceService(db).mark(payload, user.user_id)
    return ok("Attendance marked successfully", AttendanceOut.model_validate(record).model_dump(mode="json"))


# ✅ [SUMMARY] 월별 출결 요약 재계산
@router.post("/summaries")
def update_attendance_summary(
    payload: AttendanceSummaryRequest,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_teacher),
):
    summary = AttendanceService(db).update_summary(payload)
    return ok("Attendance summary updated", AttendanceSummaryOut.model_validate(summary).model_dump(mode="json"))
