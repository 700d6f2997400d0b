from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, Enum, ForeignKey
from database.db import Base
from models.enums import UserRole, UserStatus

class User(Base):
    __tablename__ = "users"  # 사용자(관리자/교사/학생/학부모) 테이블

    id = Column(Integer, primary_key=True, index=True)                       # 사용자 고유 ID
    email = Column(String(200), unique=True, index=True, nullable=False)    # 로그인 이메일
    password_hash = Column(String(255), nullable=False)                     # 해시된 비밀번호
    role = Column(Enum(UserRole), nullable=False, default=UserRole.STUDENT) # 역할
    status = Column(Enum(UserStatus), nullable=False, default=UserStatus.ACTIVE)
    first_name = Column(String(100), nullable=False)                        # 이름
    last_name = Column(String(100), nullable=False)                         # 성
    school_id = Column(Integer, ForeignKey("schools.id"), index=True)       # 소속 학교
    class_id = Column(Integer, ForeignKey("classes.id"), index=True)        # 소속 반 (학생)
    last_login = Column(DateTime)                                           # 마지막 로그인 시각
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
