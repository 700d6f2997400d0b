from datetime import datetime, timezone

from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey
from database.db import Base

class Transcript(Base):
    __tablename__ = "transcripts"  # 학생별 누적 학적부 (학생당 1건)

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True, index=True)
    total_credits = Column(Float, nullable=False, default=0)                 # 전체 이수 과목 수
    earned_credits = Column(Float, nullable=False, default=0)                # 통과 과목 수
    cumulative_gpa = Column(Float, nullable=False, default=0)                # 누적 평점
    version = Column(Integer, nullable=False)
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc),
                        onupdate=lambda: datetime.now(timezone.utc))

    __mapper_args__ = {"version_id_col": version}
