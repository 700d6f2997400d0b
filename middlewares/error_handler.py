import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.settings import settings
from utils.exceptions import AppError

logger = logging.getLogger(__name__)


def _error_body(message: str, code: str, errors=None) -> dict:
    body = {"success": False, "message": message, "error": code}
    if errors:
        body["errors"] = errors
    return body


def _field_errors(errors) -> list:
    # loc 예시: ("body", "student_id") → "student_id"
    result = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path", "header")]
        result.append({"field": ".".join(loc) or "body", "message": err.get("msg")})
    return result


def add_error_handlers(app: FastAPI):
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} 실패: {exc.message}")
        else:
            logger.info(f"{request.method} {request.url.path} → {exc.status_code} {exc.code}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, exc.code, exc.errors),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = _field_errors(exc.errors())
        fields = sorted({e["field"] for e in errors})
        message = f"Missing or invalid fields: {', '.join(fields)}"
        return JSONResponse(status_code=400, content=_error_body(message, "VALIDATION_ERROR", errors))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail), f"HTTP_{exc.status_code}"),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"{request.method} {request.url.path} 처리 중 예기치 못한 오류")
        # 운영 환경에서는 내부 메시지를 노출하지 않음
        detail = str(exc) if settings.ENV == "dev" else "Internal server error"
        return JSONResponse(
            status_code=500,
            content=_error_body("An unexpected error occurred", "INTERNAL_ERROR", [{"message": detail}]),
        )
