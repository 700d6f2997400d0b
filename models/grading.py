from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, Float, Boolean, DateTime, Enum, ForeignKey
from sqlalchemy.orm import relationship
from database.db import Base
from models.enums import GradingScale

class GradingScheme(Base):
    __tablename__ = "grading_schemes"  # 등급 산출 기준 (학교별)

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)                               # 기준 이름
    description = Column(Text)
    scale = Column(Enum(GradingScale), nullable=False, default=GradingScale.LETTER)
    is_default = Column(Boolean, nullable=False, default=False)              # 학교 기본 기준 여부 (학교별 1개)
    school_id = Column(Integer, ForeignKey("schools.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    # ✅ 등급 구간 (높은 최소점수 순으로 정렬해서 사용)
    boundaries = relationship(
        "GradeBoundary",
        back_populates="scheme",
        order_by="GradeBoundary.min_score.desc()",
        cascade="all, delete-orphan",
    )


class GradeBoundary(Base):
    __tablename__ = "grade_boundaries"  # 등급 구간 [min_score, max_score]

    id = Column(Integer, primary_key=True, index=True)
    scheme_id = Column(Integer, ForeignKey("grading_schemes.id", ondelete="CASCADE"), nullable=False, index=True)
    grade = Column(String(10), nullable=False)                               # 등급 라벨 (예: A, B+)
    min_score = Column(Float, nullable=False)                                # 최소 점수 (포함)
    max_score = Column(Float, nullable=False)                                # 최대 점수 (포함)
    grade_point = Column(Float)                                              # 평점 (선택)
    description = Column(String(200))
    pass_status = Column(Boolean, nullable=False, default=True)              # 통과 등급 여부

    scheme = relationship("GradingScheme", back_populates="boundaries")
