from typing import Dict, List, Optional

from pydantic import BaseModel


class SubjectAverage(BaseModel):
    subject: str
    average: float


# ✅ 대시보드 응답
class DashboardStats(BaseModel):
    overall: float                           # 과목 평균들의 평균
    subjects: List[SubjectAverage]           # 평균 내림차순
    grade_count: int
    big_count: int
    small_count: int
    best_subject: Optional[str] = None


# ✅ 성적표 한 행 (과목)
class ReportRow(BaseModel):
    subject: str
    per_semester: Dict[str, Optional[int]]   # 학기 → 반올림 점수, 성적 없으면 null
    overall: str                             # "10.5" 또는 "-"


class ReportMatrix(BaseModel):
    semesters: List[str]
    rows: List[ReportRow]
