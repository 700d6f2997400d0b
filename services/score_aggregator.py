"""
services/score_aggregator.py

학생 1명 × (학급, 과목) 단위의 과제/시험 평균 점수를 집계합니다.

- 과제 점수: 채점 완료(GRADED) 제출물만 사용, 제출물별 (points / total_points) * 100 의 평균
- 시험 점수: 해당 학급+과목 시험 결과 percentage 의 평균
- 대상이 없으면 0 (미제출과 0점을 구분하지 않음)
- 최종 합산: 과제 40% + 시험 60%
"""

from dataclasses import dataclass
from typing import Iterable, List

from sqlalchemy.orm import Session, joinedload

from models.assignments import Assignment, Submission
from models.enums import SubmissionStatus
from models.exams import Exam, ExamResult

ASSIGNMENT_WEIGHT = 0.4
EXAM_WEIGHT = 0.6


@dataclass(frozen=True)
class ComponentScores:
    assignment_score: float
    exam_score: float

    @property
    def total_score(self) -> float:
        return blend(self.assignment_score, self.exam_score)


def blend(assignment_score: float, exam_score: float) -> float:
    return ASSIGNMENT_WEIGHT * assignment_score + EXAM_WEIGHT * exam_score


def submission_percentage(submission: Submission) -> float:
    # 채점됐지만 점수가 비어 있으면 0점으로 취급 (분모에는 포함)
    if submission.points is None or not submission.assignment.total_points:
        return 0.0
    return (submission.points / submission.assignment.total_points) * 100


def average(values: Iterable[float]) -> float:
    values = list(values)
    return sum(values) / len(values) if values else 0.0


class ScoreAggregator:
    def __init__(self, db: Session):
        self.db = db

    def graded_submissions(self, student_id: int, class_id: int, subject_id: int) -> List[Submission]:
        return (
            self.db.query(Submission)
            .join(Assignment, Assignment.id == Submission.assignment_id)
            .options(joinedload(Submission.assignment))
            .filter(
                Submission.student_id == student_id,
                Submission.status == SubmissionStatus.GRADED,
                Assignment.class_id == class_id,
                Assignment.subject_id == subject_id,
            )
            .order_by(Submission.id)
            .all()
        )

    def exam_results(self, student_id: int, class_id: int, subject_id: int) -> List[ExamResult]:
        return (
            self.db.query(ExamResult)
            .join(Exam, Exam.id == ExamResult.exam_id)
            .filter(
                ExamResult.student_id == student_id,
                Exam.class_id == class_id,
                Exam.subject_id == subject_id,
            )
            .order_by(ExamResult.id)
            .all()
        )

    def assignment_score(self, student_id: int, class_id: int, subject_id: int) -> float:
        submissions = self.graded_submissions(student_id, class_id, subject_id)
        return average(submission_percentage(s) for s in submissions)

    def exam_score(self, student_id: int, class_id: int, subject_id: int) -> float:
        results = self.exam_results(student_id, class_id, subject_id)
        return average(r.percentage for r in results)

    def aggregate(self, student_id: int, class_id: int, subject_id: int) -> ComponentScores:
        return ComponentScores(
            assignment_score=self.assignment_score(student_id, class_id, subject_id),
            exam_score=self.exam_score(student_id, class_id, subject_id),
        )
