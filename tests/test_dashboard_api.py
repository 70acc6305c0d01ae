import pytest


def add(client, headers, subject, score, semester="12/1", type="small"):
    payload = {
        "subject": subject, "name": f"{subject} {score}", "score": score,
        "semester": semester, "type": type, "date": "2024-10-01",
    }
    resp = client.post("/api/grades/", json=payload, headers=headers)
    assert resp.status_code == 200, resp.text


def test_dashboard_empty(client, auth_headers):
    data = client.get("/api/grades/dashboard", headers=auth_headers).json()["data"]
    assert data == {
        "overall": 0, "subjects": [], "grade_count": 0,
        "big_count": 0, "small_count": 0, "best_subject": None,
    }


def test_dashboard_stats(client, auth_headers):
    add(client, auth_headers, "Deutsch", 0)
    for _ in range(3):
        add(client, auth_headers, "Physik", 15, type="big")

    data = client.get("/api/grades/dashboard", headers=auth_headers).json()["data"]
    assert data["overall"] == pytest.approx(7.5)
    assert data["subjects"] == [
        {"subject": "Physik", "average": 15.0},
        {"subject": "Deutsch", "average": 0.0},
    ]
    assert (data["grade_count"], data["big_count"], data["small_count"]) == (4, 3, 1)
    assert data["best_subject"] == "Physik"


def test_report_matrix_default_semesters(client, auth_headers):
    add(client, auth_headers, "Mathe", 15, type="big")
    add(client, auth_headers, "Mathe", 5, type="small")
    add(client, auth_headers, "Mathe", 5, type="small")
    add(client, auth_headers, "Mathe", 12, semester="13/2", type="big")
    add(client, auth_headers, "Kunst", 9, semester="11/1")

    data = client.get("/api/grades/report", headers=auth_headers).json()["data"]
    assert data["semesters"] == ["12/1", "12/2", "13/1", "13/2"]
    mathe, kunst = data["rows"]
    assert mathe == {
        "subject": "Mathe",
        "per_semester": {"12/1": 10, "12/2": None, "13/1": None, "13/2": 12},
        "overall": "11.0",
    }
    assert kunst["overall"] == "-"


def test_report_matrix_custom_columns(client, auth_headers):
    add(client, auth_headers, "Kunst", 9, semester="11/1")
    resp = client.get("/api/grades/report", params={"semesters": ["11/1", "12/1"]}, headers=auth_headers)
    data = resp.json()["data"]
    assert data["semesters"] == ["11/1", "12/1"]
    assert data["rows"] == [{"subject": "Kunst", "per_semester": {"11/1": 9, "12/1": None}, "overall": "9.0"}]


def test_subject_suggestions(client, auth_headers):
    client.put("/api/auth/me", json={"preferences": {"subjects": ["Mathematik", "Physik"]}}, headers=auth_headers)
    add(client, auth_headers, "Astronomie", 13)
    add(client, auth_headers, "Physik", 10)

    data = client.get("/api/subjects/", headers=auth_headers).json()["data"]
    assert data == ["Mathematik", "Physik", "Astronomie"]


def test_subject_suggestions_default_list(client, auth_headers):
    data = client.get("/api/subjects/", headers=auth_headers).json()["data"]
    assert data[0] == "Mathematik"
    assert len(data) == 15
