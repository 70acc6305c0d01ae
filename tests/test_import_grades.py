from datetime import date

from schemas.users import SemesterDateRange
from scripts.import_grades import import_grades, parse_rows
from conftest import register

RANGES = [SemesterDateRange(id="12/1", start=date(2024, 8, 1), end=date(2025, 1, 31))]


def test_parse_rows_assigns_and_skips():
    rows = [
        {"subject": "Mathe", "name": "Klausur", "score": "12", "type": "big", "date": "2024-10-01", "semester": ""},
        {"subject": "Mathe", "name": "Test", "score": "9", "type": "small", "date": "2025-05-01", "semester": "12/2"},
        {"subject": "Mathe", "name": "Ferien", "score": "9", "type": "small", "date": "2025-08-15", "semester": ""},
        {"subject": "Mathe", "name": "Kaputt", "score": "viel", "type": "small", "date": "2024-10-01", "semester": ""},
    ]
    records, skipped = parse_rows(rows, RANGES)
    assert [(r.name, r.semester) for r in records] == [("Klausur", "12/1"), ("Test", "12/2")]
    assert [line for line, _ in skipped] == [4, 5]


def test_import_grades_writes_rows(client, tmp_path):
    token = register(client, "csvuser", "pw")["token"]
    csv_path = tmp_path / "grades.csv"
    csv_path.write_text(
        "subject,name,score,type,date,semester\n"
        "Chemie,Klausur,13,big,2024-11-05,12/1\n"
        "Chemie,Test,8,small,2024-11-20,\n",
        encoding="utf-8",
    )

    imported, skipped = import_grades(str(csv_path), "csvuser")
    assert (imported, skipped) == (1, 1)

    grades = client.get("/api/grades/", headers={"Authorization": f"Bearer {token}"}).json()["data"]
    assert [g["name"] for g in grades] == ["Klausur"]
