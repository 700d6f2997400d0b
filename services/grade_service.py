"""
services/grade_service.py

과목별 학기 성적 산출/저장.

산출 순서 (하나의 트랜잭션, commit 1회):
  1) (학생, 과목, 학년도, 학기) 기존 성적 행을 FOR UPDATE 로 조회
  2) 잠긴 성적이면 거부 (force 지정 시 진행)
  3) ScoreAggregator 로 과제/시험 평균 → 가중 합산
  4) GradeBoundaryResolver 로 등급/평점/통과 여부 결정
  5) 산출 필드 전체 교체 후 commit
동시 재산출 경합은 version 컬럼 / 유니크 키 충돌로 감지되어 ConflictError(409) 로 돌려준다.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.orm.exc import StaleDataError

from models.academic_years import AcademicYear, Term
from models.classes import Class
from models.enums import TermType
from models.grades import Grade
from models.subjects import Subject
from models.users import User
from schemas.grades import GradeCalculateRequest
from services.common import require
from services.grade_boundary import GradeBoundaryResolver
from services.score_aggregator import ScoreAggregator
from utils.exceptions import ConflictError, GradeLockedError, NotFoundError

logger = logging.getLogger(__name__)

class GradeService:
    def __init__(self, db: Session):
        self.db = db
        self.aggregator = ScoreAggregator(db)
        self.resolver = GradeBoundaryResolver(db)

    # ==========================================================
    # [산출] 과목 1개
    # ==========================================================
    def calculate_grade(self, data: GradeCalculateRequest, skip_locked: bool = False) -> Grade:
        try:
            grade = self._compute_and_write(data, skip_locked)
            self.db.commit()
        except (StaleDataError, IntegrityError) as e:
            self.db.rollback()
            logger.warning(
                f"성적 동시 갱신 충돌: student={data.student_id} subject={data.subject_id} "
                f"year={data.academic_year_id} term={data.term_type.value} ({type(e).__name__})"
            )
            raise ConflictError("Grade was modified concurrently, please retry")
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(grade)
        return grade

    def _compute_and_write(self, data: GradeCalculateRequest, skip_locked: bool) -> Grade:
        require(self.db, User, data.student_id, "Student")
        require(self.db, Class, data.class_id, "Class")
        require(self.db, Subject, data.subject_id, "Subject")
        require(self.db, AcademicYear, data.academic_year_id, "Academic year")
        if data.term_id is not None:
            require(self.db, Term, data.term_id, "Term")

        grade = (
            self.db.query(Grade)
            .filter(
                Grade.student_id == data.student_id,
                Grade.subject_id == data.subject_id,
                Grade.academic_year_id == data.academic_year_id,
                Grade.term_type == data.term_type,
            )
            .with_for_update()
            .first()
        )

        if grade is not None and grade.is_locked and not data.force:
            if skip_locked:
                logger.info(f"잠긴 성적 유지: grade={grade.id}")
                return grade
            raise GradeLockedError(grade.id)

        scores = self.aggregator.aggregate(data.student_id, data.class_id, data.subject_id)
        total_score = scores.total_score

        scheme_id = self.resolver.resolve_scheme_id(data.class_id, data.scheme_id)
        resolved = self.resolver.resolve(scheme_id, total_score)

        if grade is None:
            grade = Grade(
                student_id=data.student_id,
                subject_id=data.subject_id,
                academic_year_id=data.academic_year_id,
                term_type=data.term_type,
            )
            self.db.add(grade)

        # ✅ 산출 필드 전체 교체 (remarks / is_locked 는 산출 대상 아님)
        grade.class_id = data.class_id
        if data.term_id is not None:
            grade.term_id = data.term_id
        grade.scheme_id = scheme_id
        grade.assignment_score = scores.assignment_score
        grade.exam_score = scores.exam_score
        grade.total_score = total_score
        grade.max_score = 100
        grade.percentage = total_score
        grade.letter_grade = resolved.letter_grade
        grade.grade_point = resolved.grade_point
        grade.is_passed = resolved.is_passed
        self.db.flush()

        logger.info(
            f"성적 산출: student={data.student_id} subject={data.subject_id} "
            f"assignment={scores.assignment_score:.2f} exam={scores.exam_score:.2f} "
            f"total={total_score:.2f} grade={resolved.letter_grade}"
        )
        return grade

    # ==========================================================
    # [산출] 학급 편성 과목 전체
    # - 과목별로 개별 commit: N번째 과목에서 실패하면 앞 과목은 저장된 채로 중단
    # ==========================================================
    def calculate_all(
        self,
        student_id: int,
        class_id: int,
        academic_year_id: int,
        term_type: TermType,
        term_id: Optional[int] = None,
    ) -> List[Grade]:
        klass = require(self.db, Class, class_id, "Class")
        subject_ids = [cs.subject_id for cs in klass.class_subjects]

        grades = []
        for subject_id in subject_ids:
            grade = self.calculate_grade(
                GradeCalculateRequest(
                    student_id=student_id,
                    class_id=class_id,
                    subject_id=subject_id,
                    academic_year_id=academic_year_id,
                    term_type=term_type,
                    term_id=term_id,
                ),
                skip_locked=True,
            )
            grades.append(grade)
        return grades

    # ==========================================================
    # [조회]
    # ==========================================================
    def get_grade(self, grade_id: int) -> Grade:
        grade = (
            self.db.query(Grade)
            .options(joinedload(Grade.subject))
            .filter(Grade.id == grade_id)
            .first()
        )
        if grade is None:
            raise NotFoundError("Grade")
        return grade

    def get_student_grades(
        self,
        student_id: int,
        academic_year_id: Optional[int] = None,
        term_type: Optional[TermType] = None,
    ) -> List[Grade]:
        query = (
            self.db.query(Grade)
            .join(Subject, Subject.id == Grade.subject_id)
            .options(joinedload(Grade.subject))
            .filter(Grade.student_id == student_id)
        )
        if academic_year_id is not None:
            query = query.filter(Grade.academic_year_id == academic_year_id)
        if term_type is not None:
            query = query.filter(Grade.term_type == term_type)
        return query.order_by(Grade.academic_year_id.desc(), Subject.name.asc()).all()

    def get_class_grades(
        self,
        class_id: int,
        academic_year_id: int,
        term_type: TermType,
        subject_id: Optional[int] = None,
    ) -> List[Grade]:
        query = (
            self.db.query(Grade)
            .options(joinedload(Grade.subject))
            .filter(
                Grade.class_id == class_id,
                Grade.academic_year_id == academic_year_id,
                Grade.term_type == term_type,
            )
        )
        if subject_id is not None:
            query = query.filter(Grade.subject_id == subject_id)
        return query.order_by(Grade.total_score.desc(), Grade.id).all()

    # ==========================================================
    # [수정] 잠금 / 비고
    # ==========================================================
    def set_lock(self, grade_id: int, locked: bool) -> Grade:
        grade = self.get_grade(grade_id)
        grade.is_locked = locked
        self._commit(grade)
        logger.info(f"성적 잠금 변경: grade={grade_id} locked={locked}")
        return grade

    def update_remarks(self, grade_id: int, remarks: Optional[str]) -> Grade:
        grade = self.get_grade(grade_id)
        grade.remarks = remarks
        self._commit(grade)
        return grade

    def _commit(self, grade: Grade):
        try:
            self.db.commit()
        except StaleDataError:
            self.db.rollback()
            raise ConflictError("Grade was modified concurrently, please retry")
        self.db.refresh(grade)
