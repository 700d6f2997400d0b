from sqlalchemy import Column, Integer, String, Enum, ForeignKey
from database.db import Base
from models.enums import SubjectCategory

class Subject(Base):
    __tablename__ = "subjects"  # 과목 정보 테이블

    id = Column(Integer, primary_key=True, index=True)                          # 과목 고유 ID (Primary Key)
    name = Column(String(100), nullable=False)                                 # 과목 이름 (예: 수학, 영어)
    code = Column(String(30), nullable=False)                                  # 과목 코드
    category = Column(Enum(SubjectCategory), nullable=False, default=SubjectCategory.CORE)  # 과목 분류
    credits = Column(Integer)                                                  # 학점 (선택)
    school_id = Column(Integer, ForeignKey("schools.id"), nullable=False, index=True)
