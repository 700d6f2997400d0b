from sqlalchemy import Column, Integer, String, Boolean, Date, ForeignKey
from sqlalchemy.orm import relationship
from database.db import Base

class AcademicYear(Base):
    __tablename__ = "academic_years"  # 학년도 테이블

    id = Column(Integer, primary_key=True, index=True)                          # 학년도 고유 ID
    name = Column(String(50), nullable=False)                                  # 학년도 이름 (예: 2025/2026)
    start_date = Column(Date, nullable=False)                                  # 시작일
    end_date = Column(Date, nullable=False)                                    # 종료일
    is_current = Column(Boolean, nullable=False, default=False)                # 현재 학년도 여부 (학교별 1개)
    school_id = Column(Integer, ForeignKey("schools.id"), nullable=False, index=True)

    # ✅ 학년도 ↔ 학기 (1:N)
    terms = relationship("Term", back_populates="academic_year", order_by="Term.term_number",
                         cascade="all, delete-orphan")


class Term(Base):
    __tablename__ = "terms"  # 학기 테이블

    id = Column(Integer, primary_key=True, index=True)                          # 학기 고유 ID
    name = Column(String(50), nullable=False)                                  # 학기 이름
    term_number = Column(Integer, nullable=False)                              # 학기 번호 (1, 2, 3)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    is_current = Column(Boolean, nullable=False, default=False)                # 현재 학기 여부 (학년도별 1개)
    academic_year_id = Column(Integer, ForeignKey("academic_years.id"), nullable=False, index=True)

    academic_year = relationship("AcademicYear", back_populates="terms")
