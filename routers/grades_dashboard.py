from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import CurrentUser
from models.grades import Grade as GradeModel
from models.users import User as UserModel
from schemas.stats import DashboardStats, ReportMatrix
from services.aggregation import build_report_matrix, compute_overall_stats, count_by_type
from services.semesters import default_semesters

# ✅ grades.py 보다 먼저 등록해야 /grades/{grade_id} 와 겹치지 않음
router = APIRouter(prefix="/grades", tags=["성적 통계"])


def _all_grades(db: Session, user: UserModel):
    # 집계는 항상 사용자 성적 전체 스냅샷으로 계산
    return db.query(GradeModel).filter(GradeModel.user_id == user.id).order_by(GradeModel.id).all()


# ==========================================================
# [대시보드] 전체 평균, 과목별 평균, 개수
# ==========================================================
@router.get("/dashboard")
def get_dashboard(user: CurrentUser, db: Session = Depends(get_db)):
    grades = _all_grades(db, user)
    stats = compute_overall_stats(grades)
    counts = count_by_type(grades)

    data = DashboardStats(
        overall=stats["overall"],
        subjects=stats["subjects"],
        grade_count=counts["total"],
        big_count=counts["big"],
        small_count=counts["small"],
        best_subject=stats["subjects"][0]["subject"] if stats["subjects"] else None,
    )
    return {"success": True, "data": data.model_dump(mode="json")}


# ==========================================================
# [성적표] 과목 × 학기 매트릭스
# ==========================================================
@router.get("/report")
def get_report(
    user: CurrentUser,
    semesters: Optional[List[str]] = Query(default=None, description="열(학기) 순서. 비우면 기본 4개 학기"),
    db: Session = Depends(get_db),
):
    columns = semesters or default_semesters()
    rows = build_report_matrix(_all_grades(db, user), columns)
    data = ReportMatrix(semesters=list(dict.fromkeys(columns)), rows=rows)
    return {"success": True, "data": data.model_dump(mode="json")}
