import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from models.classes import Class
from models.exams import Exam, ExamResult
from models.subjects import Subject
from models.users import User
from schemas.exams import ExamCreate, ExamResultCreate
from services.common import require
from utils.exceptions import DomainViolationError

logger = logging.getLogger(__name__)


class ExamService:
    def __init__(self, db: Session):
        self.db = db

    def create(self, data: ExamCreate, created_by_id: int) -> Exam:
        require(self.db, Class, data.class_id, "Class")
        require(self.db, Subject, data.subject_id, "Subject")
        exam = Exam(**data.model_dump(), created_by_id=created_by_id)
        self.db.add(exam)
        self.db.commit()
        self.db.refresh(exam)
        return exam

    def record_result(self, exam_id: int, data: ExamResultCreate) -> ExamResult:
        """시험 점수 입력 (재입력 시 덮어씀)"""
        exam = require(self.db, Exam, exam_id, "Exam")
        require(self.db, User, data.student_id, "Student")

        if data.score < 0 or data.score > exam.total_marks:
            raise DomainViolationError(f"Marks must be between 0 and {exam.total_marks}")

        result = (
            self.db.query(ExamResult)
            .filter(ExamResult.exam_id == exam_id, ExamResult.student_id == data.student_id)
            .first()
        )
        if result is None:
            result = ExamResult(exam_id=exam_id, student_id=data.student_id)
            self.db.add(result)

        result.score = data.score
        result.total_marks = exam.total_marks
        result.percentage = (data.score / exam.total_marks) * 100 if exam.total_marks > 0 else 0.0
        result.passed = data.score >= exam.passing_marks if exam.passing_marks is not None else False
        result.submitted_at = datetime.now(timezone.utc)
        self.db.commit()
        self.db.refresh(result)
        logger.info(f"시험 결과 입력: exam={exam_id} student={data.student_id} score={data.score}/{exam.total_marks}")
        return result
