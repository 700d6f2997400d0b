from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt
from passlib.context import CryptContext

from config.settings import settings
from utils.exceptions import AuthenticationError

# 비밀번호 해시 (bcrypt)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def _encode(user_id: int, email: str, role: str, token_type: str, expires: timedelta, secret: str) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),   # PyJWT는 sub 클레임이 문자열이어야 함
        "email": email,
        "role": role,
        "type": token_type,
        "iat": now,
        "exp": now + expires,
    }
    return jwt.encode(payload, secret, algorithm=settings.JWT_ALGORITHM)


def create_access_token(user_id: int, email: str, role: str) -> str:
    return _encode(
        user_id, email, role, ACCESS_TOKEN,
        timedelta(minutes=settings.JWT_ACCESS_EXPIRE_MINUTES), settings.JWT_SECRET,
    )


def create_refresh_token(user_id: int, email: str, role: str) -> str:
    return _encode(
        user_id, email, role, REFRESH_TOKEN,
        timedelta(days=settings.JWT_REFRESH_EXPIRE_DAYS), settings.JWT_REFRESH_SECRET,
    )


def decode_token(token: str, token_type: str = ACCESS_TOKEN) -> Dict[str, Any]:
    """토큰 검증 후 payload 반환. 만료/위조/타입 불일치 시 AuthenticationError"""
    secret = settings.JWT_SECRET if token_type == ACCESS_TOKEN else settings.JWT_REFRESH_SECRET
    try:
        payload = jwt.decode(token, secret, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except jwt.InvalidTokenError:
        raise AuthenticationError(f"Invalid or expired {token_type} token")

    if payload.get("type") != token_type:
        raise AuthenticationError(f"Invalid or expired {token_type} token")
    return payload
