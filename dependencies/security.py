from typing import Optional, Annotated
from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session
import jwt
import logging

from database.db import get_db
from models.users import User as UserModel
from utils.security import decode_access_token

logger = logging.getLogger(__name__)

AuthHeader = Annotated[Optional[str], Header(alias="Authorization")]


def get_current_user(authorization: AuthHeader = None, db: Session = Depends(get_db)) -> UserModel:
    # 토큰이 없으면 401, 토큰이 잘못/만료되었으면 403
    if not authorization:
        raise HTTPException(
            status_code=401,
            detail="Missing Authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # "Bearer <token>" 파싱
    try:
        scheme, token = authorization.split(" ", 1)
    except ValueError:
        raise HTTPException(
            status_code=401,
            detail="Invalid Authorization header format",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(
            status_code=401,
            detail="Invalid auth scheme",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = decode_access_token(token.strip())
    except jwt.InvalidTokenError as e:
        logger.info(f"토큰 검증 실패: {e}")
        raise HTTPException(status_code=403, detail="Invalid token")

    # 탈퇴한 계정의 토큰
    user = db.query(UserModel).filter(UserModel.id == payload["id"]).first()
    if user is None:
        raise HTTPException(
            status_code=401,
            detail="User no longer exists",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


CurrentUser = Annotated[UserModel, Depends(get_current_user)]
