from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime
from database.db import Base

class School(Base):
    __tablename__ = "schools"  # 학교(테넌트) 정보 테이블

    id = Column(Integer, primary_key=True, index=True)                 # 학교 고유 ID (Primary Key)
    name = Column(String(200), nullable=False)                        # 학교 이름
    code = Column(String(50), unique=True, nullable=False)            # 학교 코드 (고유)
    email = Column(String(200), nullable=False)                       # 대표 이메일
    phone = Column(String(30))                                        # 대표 연락처
    address = Column(String(300), nullable=False)                     # 주소
    city = Column(String(100), nullable=False)                        # 도시
    country = Column(String(100), nullable=False)                     # 국가
    principal_name = Column(String(100))                              # 교장 이름 (성적표 표기용)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
