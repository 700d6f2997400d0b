from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import CurrentUser, get_current_user, require_teacher
from schemas.common import ok
from schemas.grades import GradeOut
from schemas.transcripts import TranscriptOut
from services.transcript_service import TranscriptService

router = APIRouter(prefix="/students", tags=["학적부"])


# ✅ [READ] 학적부 + 전체 성적 이력 (없으면 빈 학적부 생성)
@router.get("/{student_id}/transcript")
def get_transcript(
    student_id: int,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    transcript, history = TranscriptService(db).get(student_id)
    return ok("Transcript retrieved successfully", {
        "transcript": TranscriptOut.model_validate(transcript).model_dump(mode="json"),
        "grades": [GradeOut.model_validate(g).model_dump(mode="json") for g in history],
    })


# ✅ [UPDATE] 누적 이수/평점 재계산
@router.post("/{student_id}/transcript/update")
def update_transcript(
    student_id: int,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_teacher),
):
    transcript = TranscriptService(db).update(student_id)
    return ok("Transcript updated successfully", TranscriptOut.model_validate(transcript).model_dump(mode="json"))
