from sqlalchemy import Column, Integer, String, Date, Text, ForeignKey
from sqlalchemy.dialects.mysql import LONGTEXT
from sqlalchemy.orm import relationship
from database.db import Base

class Grade(Base):
    __tablename__ = "grades"  # 과제/시험 단위 성적 테이블

    id = Column(Integer, primary_key=True, index=True)                                   # 성적 고유 ID (Primary Key)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)  # 소유자
    subject = Column(String(100), nullable=False)          # 과목 (자유 입력)
    name = Column(String(100), nullable=False)             # 시험/과제 이름
    score = Column(Integer, nullable=False)                # 점수 (0~15 점제)
    semester = Column(String(10), nullable=False)          # 학기 (예: 12/1, 13/2)
    type = Column(String(10), nullable=False)              # big(Klausur) / small(Test)
    date = Column(Date, nullable=False)                    # 시행일
    attachment = Column(Text().with_variant(LONGTEXT(), "mysql"))  # data URL (base64)
    attachment_type = Column(String(20))                   # image / pdf
    file_name = Column(String(255))                        # 원본 파일명

    owner = relationship("User", back_populates="grades")
