from typing import Optional

from pydantic import BaseModel

from schemas.common import ORMModel


# ✅ 입력용 (POST)
class SchoolCreate(BaseModel):
    name: str
    code: str
    email: str
    phone: Optional[str] = None
    address: str
    city: str
    country: str
    principal_name: Optional[str] = None


# ✅ 출력용
class SchoolOut(SchoolCreate, ORMModel):
    id: int
