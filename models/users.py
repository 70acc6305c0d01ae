from sqlalchemy import Column, Integer, String, JSON
from sqlalchemy.orm import relationship
from database.db import Base

class User(Base):
    __tablename__ = "users"  # 사용자 계정 테이블

    id = Column(Integer, primary_key=True, index=True)               # 사용자 고유 ID (Primary Key)
    username = Column(String(50), unique=True, nullable=False)      # 로그인 아이디
    password = Column(String(255), nullable=False)                  # 비밀번호 해시
    preferences = Column(JSON, nullable=False, default=dict)        # 과목 목록 / 학기 기간 설정

    # ✅ 계정 삭제 시 성적도 함께 삭제
    grades = relationship(
        "Grade",
        back_populates="owner",
        cascade="all, delete-orphan",
    )
