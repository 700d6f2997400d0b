from dataclasses import dataclass
from typing import Optional, Annotated

from fastapi import Depends, Header

from models.enums import UserRole
from utils.exceptions import AuthenticationError, PermissionDeniedError
from utils.security import decode_token

AuthHeader = Annotated[Optional[str], Header(alias="Authorization")]


@dataclass
class CurrentUser:
    user_id: int
    email: str
    role: UserRole


def get_current_user(authorization: AuthHeader = None) -> CurrentUser:
    if not authorization:
        raise AuthenticationError("Access token is required")

    # "Bearer <token>" 파싱
    try:
        scheme, token = authorization.split(" ", 1)
    except ValueError:
        raise AuthenticationError("Invalid Authorization header format")

    if scheme.lower() != "bearer":
        raise AuthenticationError("Invalid auth scheme")

    payload = decode_token(token.strip())
    try:
        return CurrentUser(
            user_id=int(payload["sub"]),
            email=payload.get("email", ""),
            role=UserRole(payload["role"]),
        )
    except (KeyError, ValueError):
        raise AuthenticationError("Invalid token payload")


def require_roles(*allowed: UserRole):
    """허용된 역할만 통과시키는 의존성 생성기"""
    def _guard(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if user.role not in allowed:
            roles = ", ".join(r.value for r in allowed)
            raise PermissionDeniedError(f"This action requires one of these roles: {roles}")
        return user
    return _guard


# ✅ 자주 쓰는 역할 조합
require_school_admin = require_roles(UserRole.SUPER_ADMIN, UserRole.SCHOOL_ADMIN)
require_teacher = require_roles(UserRole.SUPER_ADMIN, UserRole.SCHOOL_ADMIN, UserRole.TEACHER)
