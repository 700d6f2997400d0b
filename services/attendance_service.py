import calendar
import logging
from datetime import date

from sqlalchemy.orm import Session

from models.attendance import Attendance, AttendanceSummary
from models.classes import Class
from models.enums import AttendanceStatus
from models.users import User
from schemas.attendance import AttendanceMark, AttendanceSummaryRequest
from services.common import require

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(self, db: Session):
        self.db = db

    def mark(self, data: AttendanceMark, marked_by_id: int) -> Attendance:
        """(학생, 학급, 날짜) 당 1건 - 다시 기록하면 상태를 덮어씀"""
        require(self.db, User, data.student_id, "Student")
        require(self.db, Class, data.class_id, "Class")

        record = (
            self.db.query(Attendance)
            .filter(
                Attendance.student_id == data.student_id,
                Attendance.class_id == data.class_id,
                Attendance.date == data.date,
            )
            .first()
        )
        if record is None:
            record = Attendance(student_id=data.student_id, class_id=data.class_id, date=data.date)
            self.db.add(record)
        record.status = data.status
        record.remarks = data.remarks
        record.marked_by_id = marked_by_id
        self.db.commit()
        self.db.refresh(record)
        return record

    def update_summary(self, data: AttendanceSummaryRequest) -> AttendanceSummary:
        """해당 월 출결 기록으로 월별 요약 재계산 (지각은 출석률에 포함)"""
        last_day = calendar.monthrange(data.year, data.month)[1]
        records = (
            self.db.query(Attendance)
            .filter(
                Attendance.student_id == data.student_id,
                Attendance.class_id == data.class_id,
                Attendance.date >= date(data.year, data.month, 1),
                Attendance.date <= date(data.year, data.month, last_day),
            )
            .all()
        )

        statuses = [r.status for r in records]
        total_days = len(statuses)
        present_days = statuses.count(AttendanceStatus.PRESENT)
        late_days = statuses.count(AttendanceStatus.LATE)
        absent_days = statuses.count(AttendanceStatus.ABSENT)
        excused_days = statuses.count(AttendanceStatus.EXCUSED) + statuses.count(AttendanceStatus.SICK)
        rate = (present_days + late_days) / total_days * 100 if total_days else 0.0

        summary = (
            self.db.query(AttendanceSummary)
            .filter(
                AttendanceSummary.student_id == data.student_id,
                AttendanceSummary.class_id == data.class_id,
                AttendanceSummary.month == data.month,
                AttendanceSummary.year == data.year,
            )
            .first()
        )
        if summary is None:
            summary = AttendanceSummary(
                student_id=data.student_id, class_id=data.class_id, month=data.month, year=data.year
            )
            self.db.add(summary)

        summary.total_days = total_days
        summary.present_days = present_days + late_days
        summary.absent_days = absent_days
        summary.late_days = late_days
        summary.excused_days = excused_days
        summary.attendance_rate = rate
        self.db.commit()
        self.db.refresh(summary)
        logger.info(
            f"출결 요약 갱신: student={data.student_id} class={data.class_id} "
            f"{data.year}-{data.month:02d} rate={rate:.1f}%"
        )
        return summary
