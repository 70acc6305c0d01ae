from datetime import date as Date
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from services.attachments import check_size, decode_data_url, detect_kind

GradeType = Literal["big", "small"]          # big: Klausur(정기시험) / small: Test(쪽지시험)
AttachmentKind = Literal["image", "pdf"]


# ✅ 첨부파일: 없으면 None, 있으면 세 필드가 항상 함께 존재
class Attachment(BaseModel):
    kind: AttachmentKind                     # image / pdf
    data: str                                # data URL (base64)
    file_name: str = Field(..., min_length=1, max_length=255)

    @field_validator("data")
    @classmethod
    def _check_data_url(cls, v: str) -> str:
        _, content = decode_data_url(v)
        check_size(content)
        return v

    @model_validator(mode="before")
    @classmethod
    def _fill_kind(cls, values):
        # kind가 비어 있으면 data URL의 media type으로 판별
        if isinstance(values, dict) and not values.get("kind") and isinstance(values.get("data"), str):
            try:
                media_type, _ = decode_data_url(values["data"])
            except ValueError:
                return values                # data 검증에서 에러 처리
            values = {**values, "kind": detect_kind(media_type)}
        return values


# ✅ 입력용 (POST/PUT)
class GradeCreate(BaseModel):
    subject: str = Field(..., min_length=1, max_length=100)   # 과목
    name: str = Field(..., min_length=1, max_length=100)      # 시험/과제 이름
    score: int                                                # 점수 (0~15 권장, 서버에서 강제하지 않음)
    semester: Optional[str] = Field(default=None, min_length=1, max_length=10)  # 비우면 시행일로 자동 배정
    type: GradeType = "small"
    date: Date
    attachment: Optional[Attachment] = None

    @field_validator("subject", "name")
    @classmethod
    def _strip(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


# ✅ 출력용 / 집계 입력용 성적 레코드
class GradeRecord(BaseModel):
    id: int
    subject: str
    name: str
    score: int
    semester: str
    type: GradeType
    date: Date
    attachment: Optional[Attachment] = None

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_model(cls, row) -> "GradeRecord":
        """ORM Grade(첨부 컬럼 3개가 평평하게 저장됨) → GradeRecord"""
        attachment = None
        if row.attachment:
            attachment = Attachment.model_construct(
                kind=row.attachment_type or "pdf",
                data=row.attachment,
                file_name=row.file_name or "File",
            )
        return cls(
            id=row.id,
            subject=row.subject,
            name=row.name,
            score=row.score,
            semester=row.semester,
            type=row.type,
            date=row.date,
            attachment=attachment,
        )
