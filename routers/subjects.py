from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import CurrentUser
from models.grades import Grade as GradeModel
from schemas.users import DEFAULT_SUBJECTS, Preferences

router = APIRouter(prefix="/subjects", tags=["과목"])


# ✅ [READ] 과목 입력 추천 목록
# - 사용자 설정 과목 목록(없으면 기본 목록) + 이미 성적에 쓰인 과목, 중복 제거
@router.get("/")
def read_subjects(user: CurrentUser, db: Session = Depends(get_db)):
    configured = Preferences.model_validate(user.preferences or {}).subjects
    suggestions = list(configured if configured is not None else DEFAULT_SUBJECTS)

    used = (
        db.query(GradeModel.subject)
        .filter(GradeModel.user_id == user.id)
        .order_by(GradeModel.id)
        .all()
    )
    for (subject,) in used:
        if subject not in suggestions:
            suggestions.append(subject)

    return {"success": True, "data": suggestions}
