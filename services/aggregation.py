"""
services/aggregation.py

성적 집계 서비스 (대시보드 통계 / 성적표 매트릭스)

- 입력은 한 사용자의 전체 성적 목록 스냅샷입니다. ORM 객체(models.grades.Grade)와
  스키마 객체(schemas.grades.GradeRecord) 모두 subject/score/semester/type 속성만 있으면 됩니다.
- 모든 함수는 순수 함수입니다. DB 접근, 캐시, 전역 상태 없음.
"""

from __future__ import annotations

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Optional, Sequence


def partition_by_subject(records: Iterable[Any]) -> Dict[str, List[Any]]:
    """과목명(정확히 일치) 기준으로 묶음. 처음 등장한 순서를 유지"""
    partitions: Dict[str, List[Any]] = {}
    for record in records:
        partitions.setdefault(record.subject, []).append(record)
    return partitions


def _mean(values: Sequence[float]) -> Optional[float]:
    if not values:
        return None
    return sum(values) / len(values)


def round_half_up(value: float) -> int:
    """x.5는 올림 (점수는 음수가 없으므로 0에서 먼 쪽 반올림과 같음)"""
    return math.floor(value + 0.5)


def format_one_decimal(value: float) -> str:
    """소수 첫째 자리 문자열. float의 정확한 값 기준으로 x.x5는 올림 (예: 10.25 → "10.3")"""
    return str(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


# ==========================================================
# [대시보드] 전체 평균 + 과목별 평균
# ==========================================================
def compute_overall_stats(records: Iterable[Any]) -> Dict[str, Any]:
    """
    과목별 단순 평균과 전체 평균을 계산합니다.

    - 과목 평균: 해당 과목 점수의 산술 평균 (big/small 구분 없음)
    - 전체 평균: 과목 평균들의 평균 (모든 점수의 평균이 아님 → 과목마다 같은 비중)
    - subjects: 평균 내림차순, 동점은 먼저 등장한 과목이 앞 (stable sort)
    - 빈 목록: {"overall": 0, "subjects": []}
    """
    partitions = partition_by_subject(records)
    if not partitions:
        return {"overall": 0, "subjects": []}

    subjects = [
        {"subject": subject, "average": _mean([g.score for g in grades])}
        for subject, grades in partitions.items()
    ]
    overall = sum(s["average"] for s in subjects) / len(subjects)

    return {
        "overall": overall,
        "subjects": sorted(subjects, key=lambda s: s["average"], reverse=True),
    }


def count_by_type(records: Iterable[Any]) -> Dict[str, int]:
    """전체/big/small 성적 개수"""
    counts = {"total": 0, "big": 0, "small": 0}
    for record in records:
        counts["total"] += 1
        if record.type in ("big", "small"):
            counts[record.type] += 1
    return counts


# ==========================================================
# [성적표] 과목 × 학기 매트릭스
# ==========================================================
def semester_average(grades: Sequence[Any]) -> Optional[float]:
    """
    한 과목·한 학기 칸의 평균 (반올림 전 값)

    big 평균과 small 평균이 둘 다 있으면 두 평균의 평균(개수와 무관하게 1:1),
    한쪽만 있으면 그 평균. 성적이 없으면 None.
    """
    avg_big = _mean([g.score for g in grades if g.type == "big"])
    avg_small = _mean([g.score for g in grades if g.type == "small"])

    if avg_big is not None and avg_small is not None:
        return (avg_big + avg_small) / 2
    if avg_big is not None:
        return avg_big
    return avg_small


def build_report_matrix(records: Iterable[Any], semesters: Sequence[str]) -> List[Dict[str, Any]]:
    """
    과목별 학기 성적표 행 목록을 만듭니다.

    - per_semester: 학기 → 반올림된 정수, 해당 학기에 성적이 없으면 None
    - overall: 성적이 있는 학기들의 반올림 전 평균을 다시 평균, 소수 첫째 자리 문자열.
      성적이 있는 학기가 없으면 "-"
    - semesters에 없는 학기 값을 가진 성적은 어느 칸에도, overall에도 반영하지 않음
    - 행 순서는 과목이 처음 등장한 순서 (정렬하지 않음)
    """
    rows = []
    for subject, grades in partition_by_subject(records).items():
        per_semester: Dict[str, Optional[int]] = {}
        total, valid = 0.0, 0

        for semester in dict.fromkeys(semesters):   # 중복 학기는 한 번만
            avg = semester_average([g for g in grades if g.semester == semester])
            if avg is None:
                per_semester[semester] = None
                continue
            per_semester[semester] = round_half_up(avg)   # 표시용 반올림
            total += avg                                  # overall은 원래 값으로 누적
            valid += 1

        rows.append({
            "subject": subject,
            "per_semester": per_semester,
            "overall": format_one_decimal(total / valid) if valid else "-",
        })

    return rows
