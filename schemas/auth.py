from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from models.enums import UserRole, UserStatus
from schemas.common import ORMModel


# ✅ 회원 가입 요청
class RegisterRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=200)
    password: str = Field(..., min_length=8, max_length=72)
    first_name: str
    last_name: str
    role: UserRole = UserRole.STUDENT
    school_id: Optional[int] = None
    class_id: Optional[int] = None


# ✅ 로그인 요청
class LoginRequest(BaseModel):
    email: str
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str


# ✅ 사용자 출력용
class UserOut(ORMModel):
    id: int
    email: str
    role: UserRole
    status: UserStatus
    first_name: str
    last_name: str
    school_id: Optional[int] = None
    class_id: Optional[int] = None
    last_login: Optional[datetime] = None


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
