"""
services/report_card_service.py

학기 성적표 생성/조회/공개.

생성 절차
  1) 학급 편성 과목 전체 성적 재산출 (GradeService.calculate_all)
  2) 학생의 해당 학년도/학기 성적 전체 집계: 총점, 만점(과목수 × 100), 평균, 평점 평균
  3) 종합 등급: 과목 등급과 동일한 GradeBoundaryResolver (학교 기본 기준) 사용
  4) 반 석차: 학생별 (본인 총점 / 본인 과목수) 내림차순
  5) 출결: (학생, 학급) 의 가장 최근 월별 요약 복사
  6) (학생, 학년도, 학기) 키로 성적표 전체 교체. 공개 상태는 재생성으로 바뀌지 않음
"""

import logging
from collections import defaultdict
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.orm.exc import StaleDataError

from models.academic_years import AcademicYear, Term
from models.attendance import AttendanceSummary
from models.classes import Class
from models.enums import TermType
from models.grades import Grade
from models.report_cards import ReportCard
from models.schools import School
from models.subjects import Subject
from models.users import User
from schemas.report_cards import ReportCardGenerateRequest
from services.common import require
from services.grade_service import GradeService
from services.report_renderer import report_renderer
from utils.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


def mean_or_none(values: Iterable[Optional[float]]) -> Optional[float]:
    present = [v for v in values if v is not None]
    return sum(present) / len(present) if present else None


def rank_students(grades: Iterable[Grade]) -> List[Tuple[int, float]]:
    """
    학생별 평균(본인 총점 / 본인 과목수) 내림차순 목록.
    동점은 student_id 오름차순.
    """
    totals: Dict[int, float] = defaultdict(float)
    counts: Dict[int, int] = defaultdict(int)
    for g in grades:
        totals[g.student_id] += g.total_score
        counts[g.student_id] += 1

    averages = [(sid, totals[sid] / counts[sid]) for sid in totals]
    return sorted(averages, key=lambda item: (-item[1], item[0]))


def position_of(rankings: List[Tuple[int, float]], student_id: int) -> Tuple[Optional[int], int]:
    for idx, (sid, _) in enumerate(rankings, start=1):
        if sid == student_id:
            return idx, len(rankings)
    return None, len(rankings)


class ReportCardService:
    def __init__(self, db: Session):
        self.db = db
        self.grades = GradeService(db)

    # ==========================================================
    # [생성]
    # ==========================================================
    def generate(self, data: ReportCardGenerateRequest) -> Tuple[ReportCard, List[Grade]]:
        klass = require(self.db, Class, data.class_id, "Class")
        require(self.db, AcademicYear, data.academic_year_id, "Academic year")
        if data.term_id is not None:
            require(self.db, Term, data.term_id, "Term")

        self.grades.calculate_all(
            data.student_id, data.class_id, data.academic_year_id, data.term_type, data.term_id
        )

        grades = self.term_grades(data.student_id, data.academic_year_id, data.term_type)
        count = len(grades)
        total_marks = sum(g.total_score for g in grades)
        average_score = total_marks / count if count else 0.0
        overall_gpa = mean_or_none(g.grade_point for g in grades)

        scheme_id = self.grades.resolver.resolve_scheme_id(klass.id)
        overall_grade = self.grades.resolver.resolve(scheme_id, average_score).letter_grade

        position, out_of = self.class_position(
            data.student_id, data.class_id, data.academic_year_id, data.term_type
        )
        attendance = self.latest_attendance(data.student_id, data.class_id)

        try:
            report_card = self._upsert(data)
            report_card.class_id = data.class_id
            if data.term_id is not None:
                report_card.term_id = data.term_id
            report_card.total_marks = total_marks
            report_card.max_marks = 100 * count
            report_card.average_score = average_score
            report_card.overall_grade = overall_grade
            report_card.overall_gpa = overall_gpa
            report_card.position = position
            report_card.out_of = out_of
            report_card.total_days = attendance.total_days if attendance else 0
            report_card.days_present = attendance.present_days if attendance else 0
            report_card.days_absent = attendance.absent_days if attendance else 0
            report_card.attendance_rate = attendance.attendance_rate if attendance else 0.0
            # 코멘트는 전달된 경우에만 교체
            if data.class_teacher_comment is not None:
                report_card.class_teacher_comment = data.class_teacher_comment
            if data.principal_comment is not None:
                report_card.principal_comment = data.principal_comment
            self.db.commit()
        except (StaleDataError, IntegrityError):
            self.db.rollback()
            raise ConflictError("Report card was modified concurrently, please retry")
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(report_card)
        logger.info(
            f"성적표 생성: student={data.student_id} year={data.academic_year_id} "
            f"term={data.term_type.value} avg={average_score:.2f} position={position}/{out_of}"
        )
        return report_card, grades

    def _upsert(self, data: ReportCardGenerateRequest) -> ReportCard:
        report_card = (
            self.db.query(ReportCard)
            .filter(
                ReportCard.student_id == data.student_id,
                ReportCard.academic_year_id == data.academic_year_id,
                ReportCard.term_type == data.term_type,
            )
            .with_for_update()
            .first()
        )
        if report_card is None:
            report_card = ReportCard(
                student_id=data.student_id,
                academic_year_id=data.academic_year_id,
                term_type=data.term_type,
            )
            self.db.add(report_card)
        return report_card

    # ==========================================================
    # [집계 헬퍼]
    # ==========================================================
    def term_grades(self, student_id: int, academic_year_id: int, term_type: TermType) -> List[Grade]:
        return (
            self.db.query(Grade)
            .join(Subject, Subject.id == Grade.subject_id)
            .options(joinedload(Grade.subject))
            .filter(
                Grade.student_id == student_id,
                Grade.academic_year_id == academic_year_id,
                Grade.term_type == term_type,
            )
            .order_by(Subject.name.asc())
            .all()
        )

    def class_position(
        self, student_id: int, class_id: int, academic_year_id: int, term_type: TermType
    ) -> Tuple[Optional[int], int]:
        class_grades = (
            self.db.query(Grade)
            .filter(
                Grade.class_id == class_id,
                Grade.academic_year_id == academic_year_id,
                Grade.term_type == term_type,
            )
            .all()
        )
        return position_of(rank_students(class_grades), student_id)

    def latest_attendance(self, student_id: int, class_id: int) -> Optional[AttendanceSummary]:
        return (
            self.db.query(AttendanceSummary)
            .filter(AttendanceSummary.student_id == student_id, AttendanceSummary.class_id == class_id)
            .order_by(AttendanceSummary.created_at.desc(), AttendanceSummary.id.desc())
            .first()
        )

    # ==========================================================
    # [조회 / 공개]
    # ==========================================================
    def get(self, report_card_id: int) -> Tuple[ReportCard, List[Grade]]:
        report_card = self.db.get(ReportCard, report_card_id)
        if report_card is None:
            raise NotFoundError("Report card")
        grades = self.term_grades(report_card.student_id, report_card.academic_year_id, report_card.term_type)
        return report_card, grades

    def list_for_student(self, student_id: int) -> List[ReportCard]:
        return (
            self.db.query(ReportCard)
            .filter(ReportCard.student_id == student_id)
            .order_by(ReportCard.academic_year_id.desc(), ReportCard.term_type)
            .all()
        )

    def publish(self, report_card_id: int, published_by: int) -> ReportCard:
        report_card = self.db.get(ReportCard, report_card_id)
        if report_card is None:
            raise NotFoundError("Report card")

        report_card.is_published = True
        report_card.published_at = datetime.now(timezone.utc)
        report_card.generated_by = published_by
        try:
            self.db.commit()
        except StaleDataError:
            self.db.rollback()
            raise ConflictError("Report card was modified concurrently, please retry")
        self.db.refresh(report_card)
        logger.info(f"성적표 공개: report_card={report_card_id} by user={published_by}")
        return report_card

    def render_html(self, report_card_id: int) -> str:
        """인쇄용 성적표 HTML"""
        report_card, grades = self.get(report_card_id)
        student = self.db.get(User, report_card.student_id)
        klass = self.db.get(Class, report_card.class_id)
        school = self.db.get(School, klass.school_id) if klass else None

        return report_renderer.render_report_card({
            "student_name": student.full_name if student else f"#{report_card.student_id}",
            "class_name": klass.name if klass else "",
            "school_name": school.name if school else None,
            "report": report_card,
            "grades": grades,
        })
