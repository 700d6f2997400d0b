import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from models.enums import UserStatus
from models.users import User
from schemas.auth import LoginRequest, RegisterRequest, TokenPair
from utils.exceptions import AuthenticationError, ConflictError, NotFoundError
from utils.security import (
    REFRESH_TOKEN, create_access_token, create_refresh_token, decode_token, hash_password, verify_password,
)

logger = logging.getLogger(__name__)


def issue_tokens(user: User) -> TokenPair:
    role = user.role.value
    return TokenPair(
        access_token=create_access_token(user.id, user.email, role),
        refresh_token=create_refresh_token(user.id, user.email, role),
    )


class AuthService:
    def __init__(self, db: Session):
        self.db = db

    def register(self, data: RegisterRequest) -> User:
        email = data.email.strip().lower()
        if self.db.query(User.id).filter(User.email == email).first():
            raise ConflictError("User with this email already exists")

        user = User(
            email=email,
            password_hash=hash_password(data.password),
            role=data.role,
            status=UserStatus.ACTIVE,
            first_name=data.first_name,
            last_name=data.last_name,
            school_id=data.school_id,
            class_id=data.class_id,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"회원 가입: user={user.id} role={user.role.value}")
        return user

    def login(self, data: LoginRequest):
        user = self.db.query(User).filter(User.email == data.email.strip().lower()).first()
        if user is None or not verify_password(data.password, user.password_hash):
            raise AuthenticationError("Invalid email or password")
        if user.status != UserStatus.ACTIVE:
            raise AuthenticationError("Account is not active")

        user.last_login = datetime.now(timezone.utc)
        self.db.commit()
        self.db.refresh(user)
        return user, issue_tokens(user)

    def refresh(self, refresh_token: str) -> TokenPair:
        payload = decode_token(refresh_token, REFRESH_TOKEN)
        user = self.db.get(User, int(payload["sub"]))
        if user is None or user.status != UserStatus.ACTIVE:
            raise AuthenticationError("Invalid or expired refresh token")
        return issue_tokens(user)

    def me(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User")
        return user
