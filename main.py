from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from config.settings import settings

# ✅ 로그 설정 (LOG_LEVEL 환경변수)
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

# HTTP 라이브러리 디버그 로그 비활성화
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)


# ✅ 미들웨어 임포트
from middlewares.timing import TimingMiddleware
from middlewares.error_handler import add_error_handlers

# ✅ 라우터 임포트
from routers import (
    academic_years, assignments, attendance, auth, classes, exams,
    grades, grading_schemes, report_cards, schools, subjects, transcripts,
)

app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
)

# ✅ CORS 설정 (CORS_ORIGINS 환경변수, 쉼표 구분)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ✅ 요청 지연 측정 미들웨어 (응답 헤더 X-Latency-Ms 추가)
app.add_middleware(TimingMiddleware)

# ✅ 전역 에러 핸들러 등록 (일관된 JSON 에러 포맷)
add_error_handlers(app)

# ✅ /v1 프리픽스 라우터 등록
app.include_router(auth.router,            prefix="/v1")
app.include_router(schools.router,         prefix="/v1")
app.include_router(subjects.router,        prefix="/v1")
app.include_router(classes.router,         prefix="/v1")
app.include_router(academic_years.router,  prefix="/v1")
app.include_router(grading_schemes.router, prefix="/v1")
app.include_router(grades.router,          prefix="/v1")   # ✅ 성적 산출/조회
app.include_router(report_cards.router,    prefix="/v1")   # ✅ 성적표
app.include_router(transcripts.router,     prefix="/v1")   # ✅ 학적부
app.include_router(assignments.router,     prefix="/v1")
app.include_router(exams.router,           prefix="/v1")
app.include_router(attendance.router,      prefix="/v1")

# ✅ 헬스체크 엔드포인트
@app.get("/health")
def health_check():
    return {"status": "ok", "message": "API is running"}

# ✅ 루트 엔드포인트
@app.get("/")
def root():
    return {"message": f"{settings.APP_TITLE} - 성적 산출 / 성적표 API"}
