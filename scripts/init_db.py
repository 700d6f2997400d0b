from database.db import Base, engine

# ✅ 테이블 생성을 위해 모든 모델 import (Base.metadata 등록)
from models import (  # noqa: F401
    academic_years, assignments, attendance, classes, exams, grades,
    grading, report_cards, schools, subjects, transcripts, users,
)


def init_db():
    Base.metadata.create_all(bind=engine)
    print("✅ 테이블 생성 완료")


if __name__ == "__main__":
    init_db()
