"""
services/semesters.py

- 사용자별 학기 기간 설정(SemesterDateRange)으로 시행일 → 학기 자동 배정
- 성적표 집계는 이 설정을 보지 않고 각 성적의 semester 값만 사용합니다.
"""

from datetime import date
from typing import Any, Iterable, List, Optional

from config.settings import settings


def default_semesters() -> List[str]:
    """성적표 열(학기) 기본 순서"""
    return list(settings.SEMESTERS)


def assign_semester(day: date, ranges: Iterable[Any]) -> Optional[str]:
    """start <= day <= end 인 첫 번째 기간의 학기 id, 없으면 None"""
    for r in ranges:
        if r.start <= day <= r.end:
            return r.id
    return None


def validate_ranges(ranges: Iterable[Any]) -> None:
    """기간 역전, 학기 id 중복 검사 (위반 시 ValueError)"""
    seen = set()
    for r in ranges:
        if r.start > r.end:
            raise ValueError(f"semester {r.id}: start {r.start} is after end {r.end}")
        if r.id in seen:
            raise ValueError(f"semester {r.id} is configured more than once")
        seen.add(r.id)
