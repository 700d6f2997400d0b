import csv
import sys

from sqlalchemy.orm import Session

from database.db import SessionLocal
from models.enums import GradingScale
from schemas.grading import BoundaryIn, GradingSchemeCreate
from services.grading_scheme_service import GradingSchemeService

CSV_PATH = "data/grade_boundaries.csv"  # ✅ 파일 경로 (grade,min_score,max_score,grade_point,pass_status,description)


def _to_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "y", "yes")


def import_grading_scheme(school_id: int, name: str, is_default: bool = True):
    db: Session = SessionLocal()

    with open(CSV_PATH, newline="", encoding="utf-8-sig") as csvfile:
        reader = csv.DictReader(csvfile)
        boundaries = [
            BoundaryIn(
                grade=row["grade"].strip(),                                   # 등급 라벨
                min_score=float(row["min_score"]),                            # 최소 점수
                max_score=float(row["max_score"]),                            # 최대 점수
                grade_point=float(row["grade_point"]) if row.get("grade_point") else None,
                pass_status=_to_bool(row.get("pass_status") or "true"),
                description=row.get("description") or None,
            )
            for row in reader
        ]

    try:
        scheme = GradingSchemeService(db).create(GradingSchemeCreate(
            name=name,
            scale=GradingScale.LETTER,
            is_default=is_default,
            school_id=school_id,
            boundaries=boundaries,
        ))
        print(f"✅ 등급 기준 등록 완료: scheme={scheme.id} 구간 {len(boundaries)}개")
    finally:
        db.close()


if __name__ == "__main__":
    # 사용법: python -m scripts.import_grading_scheme <school_id> "<기준 이름>"
    import_grading_scheme(int(sys.argv[1]), sys.argv[2] if len(sys.argv) > 2 else "Default")
