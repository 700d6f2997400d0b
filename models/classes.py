from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from database.db import Base
from models.subjects import Subject

class Class(Base):
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, index=True)      # 학급 고유 ID (PK)
    name = Column(String(100), nullable=False)              # 학급 이름 (예: Form 2 East)
    code = Column(String(30), nullable=False)               # 학급 코드
    grade_level = Column(String(30), nullable=False)        # 학년 (예: Grade 7)
    stream = Column(String(30))                             # 분반
    capacity = Column(Integer, nullable=False, default=40)  # 정원

    school_id = Column(Integer, ForeignKey("schools.id"), nullable=False, index=True)
    academic_year_id = Column(Integer, ForeignKey("academic_years.id"), nullable=False, index=True)

    # ==========================================================
    # [관계 설정]
    # ==========================================================

    # ✅ 학급에 편성된 과목 목록 (1:N)
    #    - 성적 일괄 산출/성적표 생성 시 이 목록을 순서대로 사용
    class_subjects = relationship(
        "ClassSubject",
        back_populates="class_",
        order_by="ClassSubject.id",
        cascade="all, delete-orphan",
    )


class ClassSubject(Base):
    __tablename__ = "class_subjects"  # 학급-과목 편성 테이블
    __table_args__ = (UniqueConstraint("class_id", "subject_id", name="uq_class_subject"),)

    id = Column(Integer, primary_key=True, index=True)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False, index=True)
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False, index=True)
    lessons_per_week = Column(Integer)                      # 주당 수업 시수

    class_ = relationship("Class", back_populates="class_subjects")
    subject = relationship(Subject)
