import logging
from typing import List, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.orm.exc import StaleDataError

from models.academic_years import AcademicYear
from models.grades import Grade
from models.transcripts import Transcript
from models.users import User
from services.common import require
from services.report_card_service import mean_or_none
from utils.exceptions import ConflictError

logger = logging.getLogger(__name__)


class TranscriptService:
    """학생 누적 학적부 - 호출마다 전체 성적을 다시 읽어 통째로 교체"""

    def __init__(self, db: Session):
        self.db = db

    def _find(self, student_id: int):
        return self.db.query(Transcript).filter(Transcript.student_id == student_id).first()

    def history(self, student_id: int) -> List[Grade]:
        # 학년도 시작일 → 학기 순
        return (
            self.db.query(Grade)
            .join(AcademicYear, AcademicYear.id == Grade.academic_year_id)
            .options(joinedload(Grade.subject))
            .filter(Grade.student_id == student_id)
            .order_by(AcademicYear.start_date.asc(), Grade.term_type.asc(), Grade.subject_id)
            .all()
        )

    def get(self, student_id: int) -> Tuple[Transcript, List[Grade]]:
        require(self.db, User, student_id, "Student")
        transcript = self._find(student_id)
        if transcript is None:
            transcript = Transcript(student_id=student_id)
            self.db.add(transcript)
            self._commit()
            self.db.refresh(transcript)
        return transcript, self.history(student_id)

    def update(self, student_id: int) -> Transcript:
        require(self.db, User, student_id, "Student")
        grades = self.db.query(Grade).filter(Grade.student_id == student_id).all()

        total_credits = len(grades)
        earned_credits = sum(1 for g in grades if g.is_passed)
        cumulative_gpa = mean_or_none(g.grade_point for g in grades) or 0.0

        transcript = self._find(student_id)
        if transcript is None:
            transcript = Transcript(student_id=student_id)
            self.db.add(transcript)
        transcript.total_credits = total_credits
        transcript.earned_credits = earned_credits
        transcript.cumulative_gpa = cumulative_gpa
        self._commit()
        self.db.refresh(transcript)

        logger.info(
            f"학적부 갱신: student={student_id} credits={earned_credits}/{total_credits} gpa={cumulative_gpa:.2f}"
        )
        return transcript

    def _commit(self):
        try:
            self.db.commit()
        except (StaleDataError, IntegrityError):
            self.db.rollback()
            raise ConflictError("Transcript was modified concurrently, please retry")
