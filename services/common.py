from sqlalchemy.orm import Session

from utils.exceptions import NotFoundError


def require(db: Session, model, pk: int, name: str):
    """PK 로 조회, 없으면 NotFoundError(name)"""
    obj = db.get(model, pk)
    if obj is None:
        raise NotFoundError(name)
    return obj
