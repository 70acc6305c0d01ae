"""
성적 CSV → DB 일괄 등록

사용법: python -m scripts.import_grades data/grades.csv <username>
CSV 컬럼: subject,name,score,type,date[,semester]
- semester가 비어 있으면 사용자 학기 기간 설정으로 자동 배정
- 배정할 수 없거나 값이 잘못된 행은 건너뛰고 사유를 출력
"""

import csv
import sys

from pydantic import ValidationError
from sqlalchemy.orm import Session

from database.db import SessionLocal, init_db
from models.grades import Grade as GradeModel  # ✅ 모델 import
from models.users import User as UserModel
from schemas.grades import GradeCreate
from schemas.users import Preferences
from services.semesters import assign_semester

CSV_PATH = "data/grades.csv"  # ✅ 기본 파일 경로


def parse_rows(rows, ranges):
    """CSV 행(dict) 목록 → (GradeCreate 목록, [(행 번호, 사유)] 목록)"""
    records, skipped = [], []
    for line_no, row in enumerate(rows, start=2):       # 1행은 헤더
        data = {k: (v.strip() if isinstance(v, str) else v) for k, v in row.items() if k}
        data["semester"] = data.get("semester") or None
        try:
            grade = GradeCreate.model_validate(data)
        except ValidationError as e:
            skipped.append((line_no, e.errors()[0]["msg"]))
            continue

        if grade.semester is None:
            semester = assign_semester(grade.date, ranges)
            if semester is None:
                skipped.append((line_no, f"no semester configured for {grade.date.isoformat()}"))
                continue
            grade = grade.model_copy(update={"semester": semester})
        records.append(grade)
    return records, skipped


def import_grades(csv_path, username):
    init_db()
    db: Session = SessionLocal()
    try:
        user = db.query(UserModel).filter(UserModel.username == username).first()
        if user is None:
            raise SystemExit(f"❌ 사용자 없음: {username}")

        ranges = Preferences.model_validate(user.preferences or {}).semesters or []
        with open(csv_path, newline="", encoding="utf-8-sig") as csvfile:
            records, skipped = parse_rows(csv.DictReader(csvfile), ranges)

        for r in records:
            db.add(GradeModel(
                user_id=user.id,
                subject=r.subject,
                name=r.name,
                score=r.score,
                semester=r.semester,
                type=r.type,
                date=r.date,
            ))
        db.commit()
    finally:
        db.close()

    for line_no, reason in skipped:
        print(f"⚠️  {line_no}행 건너뜀: {reason}")
    print(f"✅ 성적 CSV → DB 등록 완료: {len(records)}건 (건너뜀 {len(skipped)}건)")
    return len(records), len(skipped)


if __name__ == "__main__":
    if len(sys.argv) < 3:
        raise SystemExit("사용법: python -m scripts.import_grades <csv_path> <username>")
    import_grades(sys.argv[1], sys.argv[2])
