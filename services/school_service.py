from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.academic_years import AcademicYear
from models.classes import Class, ClassSubject
from models.schools import School
from models.subjects import Subject
from schemas.classes import ClassCreate, ClassSubjectCreate
from schemas.schools import SchoolCreate
from schemas.subjects import SubjectCreate
from services.common import require
from utils.exceptions import ConflictError


class SchoolService:
    """학교 / 과목 / 학급 / 학급-과목 편성 기본 등록"""

    def __init__(self, db: Session):
        self.db = db

    def _save(self, obj, conflict_message: str):
        self.db.add(obj)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(conflict_message)
        self.db.refresh(obj)
        return obj

    def create_school(self, data: SchoolCreate) -> School:
        return self._save(School(**data.model_dump()), f"School code '{data.code}' already exists")

    def create_subject(self, data: SubjectCreate) -> Subject:
        require(self.db, School, data.school_id, "School")
        return self._save(Subject(**data.model_dump()), "Subject could not be created")

    def create_class(self, data: ClassCreate) -> Class:
        require(self.db, School, data.school_id, "School")
        require(self.db, AcademicYear, data.academic_year_id, "Academic year")
        return self._save(Class(**data.model_dump()), "Class could not be created")

    def assign_subject(self, class_id: int, data: ClassSubjectCreate) -> ClassSubject:
        require(self.db, Class, class_id, "Class")
        require(self.db, Subject, data.subject_id, "Subject")
        link = ClassSubject(class_id=class_id, **data.model_dump())
        return self._save(link, "Subject is already assigned to this class")
