from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import logging

from database.db import get_db
from dependencies.security import CurrentUser
from models.users import User as UserModel
from schemas.users import Credentials, PreferencesUpdate, TokenResponse, UserOut
from utils.security import create_access_token, hash_password, verify_password

router = APIRouter(prefix="/auth", tags=["인증"])
logger = logging.getLogger(__name__)


def _user_data(user: UserModel) -> dict:
    return UserOut.model_validate(user).model_dump(mode="json", exclude_none=True)


# ✅ [REGISTER] 회원가입 → 바로 토큰 발급
@router.post("/register")
def register(request: Credentials, db: Session = Depends(get_db)):
    username = request.username.strip()
    if not username or not request.password:
        raise HTTPException(status_code=400, detail="Username and password required")

    user = UserModel(username=username, password=hash_password(request.password), preferences={})
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Username likely taken")
    db.refresh(user)
    logger.info(f"회원가입: user_id={user.id}")

    token = create_access_token(user.id, user.username)
    return {
        "success": True,
        "data": TokenResponse(token=token, user=UserOut.model_validate(user)).model_dump(mode="json", exclude_none=True),
        "message": "Registered successfully"
    }


# ✅ [LOGIN] 로그인
@router.post("/login")
def login(request: Credentials, db: Session = Depends(get_db)):
    user = db.query(UserModel).filter(UserModel.username == request.username.strip()).first()
    if user is None:
        raise HTTPException(status_code=400, detail="User not found")
    if not verify_password(request.password, user.password):
        logger.info(f"로그인 실패(비밀번호 불일치): user_id={user.id}")
        raise HTTPException(status_code=403, detail="Invalid password")

    token = create_access_token(user.id, user.username)
    return {
        "success": True,
        "data": TokenResponse(token=token, user=UserOut.model_validate(user)).model_dump(mode="json", exclude_none=True)
    }


# ✅ [READ] 내 정보
@router.get("/me")
def read_me(user: CurrentUser):
    return {"success": True, "data": _user_data(user)}


# ✅ [UPDATE] 설정(과목 목록, 학기 기간) 통째로 교체
@router.put("/me")
def update_me(updated: PreferencesUpdate, user: CurrentUser, db: Session = Depends(get_db)):
    user.preferences = updated.preferences.model_dump(mode="json", exclude_none=True)
    db.commit()
    db.refresh(user)
    return {
        "success": True,
        "data": _user_data(user),
        "message": "Preferences updated"
    }


# ✅ [DELETE] 회원 탈퇴 (성적 전체 삭제)
@router.delete("/me")
def delete_me(user: CurrentUser, db: Session = Depends(get_db)):
    user_id = user.id
    db.delete(user)
    db.commit()
    logger.info(f"회원 탈퇴: user_id={user_id}")
    return {
        "success": True,
        "data": {"user_id": user_id},
        "message": "Account deleted"
    }
