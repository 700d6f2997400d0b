import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from models.assignments import Assignment, Submission
from models.classes import Class
from models.enums import SubmissionStatus
from models.subjects import Subject
from models.users import User
from schemas.assignments import AssignmentCreate, SubmissionCreate, SubmissionGrade
from services.common import require
from utils.exceptions import DomainViolationError, NotFoundError

logger = logging.getLogger(__name__)


def as_utc(value: datetime) -> datetime:
    # DB 에서 읽은 naive datetime 은 UTC 로 간주
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class AssignmentService:
    def __init__(self, db: Session):
        self.db = db

    def create(self, data: AssignmentCreate, created_by_id: int) -> Assignment:
        require(self.db, Class, data.class_id, "Class")
        require(self.db, Subject, data.subject_id, "Subject")
        assignment = Assignment(**data.model_dump(), created_by_id=created_by_id)
        self.db.add(assignment)
        self.db.commit()
        self.db.refresh(assignment)
        return assignment

    def submit(self, assignment_id: int, data: SubmissionCreate) -> Submission:
        assignment = require(self.db, Assignment, assignment_id, "Assignment")
        require(self.db, User, data.student_id, "Student")

        now = datetime.now(timezone.utc)
        is_late = now > as_utc(assignment.due_date)
        if is_late and not assignment.allow_late_submission:
            raise DomainViolationError("Late submissions are not allowed for this assignment")

        submission = (
            self.db.query(Submission)
            .filter(Submission.assignment_id == assignment_id, Submission.student_id == data.student_id)
            .first()
        )
        if submission is None:
            submission = Submission(assignment_id=assignment_id, student_id=data.student_id)
            self.db.add(submission)
        elif submission.status == SubmissionStatus.GRADED:
            raise DomainViolationError("Submission has already been graded")

        submission.content = data.content
        submission.status = SubmissionStatus.LATE if is_late else SubmissionStatus.SUBMITTED
        submission.submitted_at = now
        submission.is_late = is_late
        self.db.commit()
        self.db.refresh(submission)
        return submission

    def grade(self, submission_id: int, data: SubmissionGrade, graded_by_id: int) -> Submission:
        submission = self.db.get(Submission, submission_id)
        if submission is None:
            raise NotFoundError("Submission")

        total = submission.assignment.total_points
        if data.points < 0 or data.points > total:
            raise DomainViolationError(f"Points must be between 0 and {total}")

        # 지각 감점 (%)
        points = data.points
        if submission.is_late and submission.assignment.late_penalty:
            points = max(0, points - points * submission.assignment.late_penalty / 100)

        submission.points = round(points)
        submission.feedback = data.feedback
        submission.status = SubmissionStatus.GRADED
        submission.graded_at = datetime.now(timezone.utc)
        submission.graded_by_id = graded_by_id
        self.db.commit()
        self.db.refresh(submission)
        logger.info(f"과제 채점: submission={submission_id} points={submission.points}/{total}")
        return submission
