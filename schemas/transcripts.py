from datetime import datetime
from typing import Optional

from schemas.common import ORMModel


class TranscriptOut(ORMModel):
    id: int
    student_id: int
    total_credits: float      # 전체 이수 과목 수
    earned_credits: float     # 통과 과목 수
    cumulative_gpa: float     # 누적 평점
    updated_at: Optional[datetime] = None
