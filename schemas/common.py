"""
schemas/common.py

- 프로젝트 전반에서 재사용할 공용 스키마 모음
- Pydantic v2 기준
- 포함 내용:
  1) 성공 응답 봉투: ok() 헬퍼
     - 성공: {"success": true, "message": "...", "data": {...}}
     - 실패 응답은 middlewares/error_handler.py 에서 생성
  2) ORM 객체 → 응답 스키마 공용 베이스: ORMModel
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


# =========================================================
# 1) 응답 봉투 표준
# =========================================================

def ok(message: str, data: Any = None) -> dict:
    """성공 응답 dict 생성 (data 가 None 이면 생략)"""
    body = {"success": True, "message": message}
    if data is not None:
        body["data"] = data
    return body


# =========================================================
# 2) ORM 응답 베이스
# =========================================================

class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)
