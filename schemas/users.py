from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from services.semesters import validate_ranges

DEFAULT_SUBJECTS = [
    "Mathematik", "Deutsch", "Englisch", "Geschichte", "Sozialkunde",
    "Biologie", "Chemie", "Physik", "Informatik", "Religion",
    "Ethik", "Sport", "Kunst", "Musik", "Wirtschaft",
]


# ✅ 학기 기간 (양 끝 포함)
class SemesterDateRange(BaseModel):
    id: str = Field(..., min_length=1, max_length=10)   # 학기 id (예: 12/1)
    start: date
    end: date


# ✅ 사용자 설정 (PUT /auth/me 에서 통째로 교체)
class Preferences(BaseModel):
    subjects: Optional[List[str]] = None
    semesters: Optional[List[SemesterDateRange]] = None

    model_config = ConfigDict(extra="allow")   # 다크모드/언어 등 프론트 전용 값은 그대로 보관

    @field_validator("semesters")
    @classmethod
    def _check_ranges(cls, v):
        if v:
            validate_ranges(v)
        return v


class PreferencesUpdate(BaseModel):
    preferences: Preferences


# ✅ 회원가입 / 로그인 요청 (빈 값 검사는 라우터에서 400으로 처리)
class Credentials(BaseModel):
    username: str = ""
    password: str = ""


# ✅ 출력용
class UserOut(BaseModel):
    id: int
    username: str
    preferences: Preferences = Field(default_factory=Preferences)

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    token: str
    user: UserOut
