from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import CurrentUser, get_current_user
from schemas.auth import LoginRequest, RefreshRequest, RegisterRequest, UserOut
from schemas.common import ok
from services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["인증"])


# ✅ [REGISTER] 회원 가입
@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    user = AuthService(db).register(payload)
    return ok("User registered successfully", UserOut.model_validate(user).model_dump(mode="json"))


# ✅ [LOGIN] 로그인 → access / refresh 토큰 발급
@router.post("/login")
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user, tokens = AuthService(db).login(payload)
    return ok("Login successful", {
        "user": UserOut.model_validate(user).model_dump(mode="json"),
        **tokens.model_dump(),
    })


# ✅ [REFRESH] 토큰 재발급
@router.post("/refresh")
def refresh(payload: RefreshRequest, db: Session = Depends(get_db)):
    tokens = AuthService(db).refresh(payload.refresh_token)
    return ok("Token refreshed successfully", tokens.model_dump())


# ✅ [ME] 내 정보
@router.get("/me")
def me(user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return ok("User retrieved successfully", UserOut.model_validate(AuthService(db).me(user.user_id)).model_dump(mode="json"))
