from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session
import logging

from database.db import get_db
from dependencies.security import CurrentUser
from models.grades import Grade as GradeModel
from models.users import User as UserModel
from schemas.grades import GradeCreate, GradeRecord
from schemas.users import Preferences
from services.attachments import decode_data_url
from services.semesters import assign_semester

router = APIRouter(prefix="/grades", tags=["성적"])
logger = logging.getLogger(__name__)


# ==========================================================
# [공통] 헬퍼
# ==========================================================
def _grade_data(grade: GradeModel) -> dict:
    return GradeRecord.from_model(grade).model_dump(mode="json")


def _get_owned_grade(db: Session, user: UserModel, grade_id: int) -> GradeModel:
    # 다른 사용자의 성적도 404로 처리 (존재 여부 노출 안 함)
    grade = (
        db.query(GradeModel)
        .filter(GradeModel.id == grade_id, GradeModel.user_id == user.id)
        .first()
    )
    if grade is None:
        raise HTTPException(status_code=404, detail="Grade not found")
    return grade


def _resolve_semester(payload: GradeCreate, user: UserModel) -> str:
    """semester를 직접 지정하지 않았으면 사용자 학기 기간 설정으로 자동 배정"""
    if payload.semester:
        return payload.semester

    ranges = Preferences.model_validate(user.preferences or {}).semesters or []
    semester = assign_semester(payload.date, ranges)
    if semester is None:
        raise HTTPException(
            status_code=422,
            detail=f"No semester configured for {payload.date.isoformat()}; set one explicitly",
        )
    return semester


def _apply(grade: GradeModel, payload: GradeCreate, user: UserModel) -> None:
    grade.subject = payload.subject
    grade.name = payload.name
    grade.score = payload.score
    grade.semester = _resolve_semester(payload, user)
    grade.type = payload.type
    grade.date = payload.date

    attachment = payload.attachment
    grade.attachment = attachment.data if attachment else None
    grade.attachment_type = attachment.kind if attachment else None
    grade.file_name = attachment.file_name if attachment else None


# ==========================================================
# [CRUD] 성적
# ==========================================================

# ✅ [READ] 내 성적 전체 조회 (최신 시행일 순, 페이지네이션 없음)
@router.get("/")
def read_grades(user: CurrentUser, db: Session = Depends(get_db)):
    records = (
        db.query(GradeModel)
        .filter(GradeModel.user_id == user.id)
        .order_by(GradeModel.date.desc(), GradeModel.id.desc())
        .all()
    )
    return {"success": True, "data": [_grade_data(r) for r in records]}


# ✅ [CREATE] 성적 추가
@router.post("/")
def create_grade(payload: GradeCreate, user: CurrentUser, db: Session = Depends(get_db)):
    grade = GradeModel(user_id=user.id)
    _apply(grade, payload, user)
    db.add(grade)
    db.commit()
    db.refresh(grade)
    logger.info(f"성적 추가: user_id={user.id}, grade_id={grade.id}, semester={grade.semester}")
    return {
        "success": True,
        "data": _grade_data(grade),
        "message": "Grade created successfully"
    }


# ✅ [READ] 특정 성적 조회
@router.get("/{grade_id}")
def read_grade(grade_id: int, user: CurrentUser, db: Session = Depends(get_db)):
    grade = _get_owned_grade(db, user, grade_id)
    return {"success": True, "data": _grade_data(grade)}


# ✅ [UPDATE] 성적 수정 (전체 교체)
@router.put("/{grade_id}")
def update_grade(grade_id: int, payload: GradeCreate, user: CurrentUser, db: Session = Depends(get_db)):
    grade = _get_owned_grade(db, user, grade_id)
    _apply(grade, payload, user)
    db.commit()
    db.refresh(grade)
    return {
        "success": True,
        "data": _grade_data(grade),
        "message": "Grade updated successfully"
    }


# ✅ [DELETE] 성적 삭제
@router.delete("/{grade_id}")
def delete_grade(grade_id: int, user: CurrentUser, db: Session = Depends(get_db)):
    grade = _get_owned_grade(db, user, grade_id)
    db.delete(grade)
    db.commit()
    return {
        "success": True,
        "data": {"grade_id": grade_id},
        "message": "Grade deleted successfully"
    }


# ✅ [READ] 첨부파일 원본 다운로드
@router.get("/{grade_id}/attachment")
def read_attachment(grade_id: int, user: CurrentUser, db: Session = Depends(get_db)):
    grade = _get_owned_grade(db, user, grade_id)
    if not grade.attachment:
        raise HTTPException(status_code=404, detail="Grade has no attachment")

    media_type, content = decode_data_url(grade.attachment)
    file_name = grade.file_name or "attachment"
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f"inline; filename*=UTF-8''{quote(file_name)}"},
    )
