"""
utils/exceptions.py

- 서비스 계층에서 발생시키는 도메인 예외 모음
- middlewares/error_handler.py 에서 상태 코드 + 공통 에러 응답으로 변환
"""

from typing import List, Optional


class AppError(Exception):
    """모든 애플리케이션 예외의 기반 클래스"""
    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, errors: Optional[List[dict]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, resource: str):
        super().__init__(f"{resource} not found")
        self.resource = resource


class InvalidInputError(AppError):
    status_code = 400
    code = "VALIDATION_ERROR"


class DomainViolationError(AppError):
    status_code = 400
    code = "DOMAIN_VIOLATION"


class GradeLockedError(DomainViolationError):
    code = "GRADE_LOCKED"

    def __init__(self, grade_id: int):
        super().__init__(f"Grade {grade_id} is locked and cannot be recalculated")
        self.grade_id = grade_id


class ConflictError(AppError):
    status_code = 409
    code = "CONFLICT"


class AuthenticationError(AppError):
    status_code = 401
    code = "UNAUTHORIZED"


class PermissionDeniedError(AppError):
    status_code = 403
    code = "FORBIDDEN"
