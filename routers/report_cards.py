from fastapi import APIRouter, Depends, status
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import CurrentUser, get_current_user, require_teacher
from schemas.common import ok
from schemas.grades import GradeOut
from schemas.report_cards import ReportCardGenerateRequest, ReportCardOut
from services.report_card_service import ReportCardService

router = APIRouter(tags=["성적표"])


def _payload(report_card, grades) -> dict:
    return {
        "report_card": ReportCardOut.model_validate(report_card).model_dump(mode="json"),
        "grades": [GradeOut.model_validate(g).model_dump(mode="json") for g in grades],
    }


# ✅ [GENERATE] 성적 재산출 + 성적표 생성/갱신
@router.post("/report-cards/generate", status_code=status.HTTP_201_CREATED)
def generate_report_card(
    payload: ReportCardGenerateRequest,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_teacher),
):
    report_card, grades = ReportCardService(db).generate(payload)
    return ok("Report card generated successfully", _payload(report_card, grades))


@router.get("/report-cards/{report_card_id}")
def get_report_card(
    report_card_id: int,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    report_card, grades = ReportCardService(db).get(report_card_id)
    return ok("Report card retrieved successfully", _payload(report_card, grades))


# ✅ [HTML] 인쇄용 성적표
@router.get("/report-cards/{report_card_id}/html", response_class=HTMLResponse)
def render_report_card(
    report_card_id: int,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    html = ReportCardService(db).render_html(report_card_id)
    return HTMLResponse(content=html)


# ✅ [PUBLISH] 공개 처리 (되돌리기 없음)
@router.patch("/report-cards/{report_card_id}/publish")
def publish_report_card(
    report_card_id: int,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_teacher),
):
    report_card = ReportCardService(db).publish(report_card_id, user.user_id)
    return ok("Report card published", ReportCardOut.model_validate(report_card).model_dump(mode="json"))


@router.get("/students/{student_id}/report-cards")
def list_student_report_cards(
    student_id: int,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    report_cards = ReportCardService(db).list_for_student(student_id)
    return ok("Report cards retrieved successfully", [
        ReportCardOut.model_validate(r).model_dump(mode="json") for r in report_cards
    ])
