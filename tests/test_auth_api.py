from conftest import register


def test_register_returns_token_and_user(client):
    data = register(client, "anna", "pw")
    assert data["token"]
    assert data["user"]["username"] == "anna"
    assert isinstance(data["user"]["id"], int)


def test_register_requires_username_and_password(client):
    resp = client.post("/api/auth/register", json={"username": "anna"})
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Username and password required"


def test_register_duplicate_username(client):
    register(client, "anna", "pw")
    resp = client.post("/api/auth/register", json={"username": "anna", "password": "other"})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "BAD_REQUEST"


def test_login(client):
    register(client, "anna", "pw")
    resp = client.post("/api/auth/login", json={"username": "anna", "password": "pw"})
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["user"]["username"] == "anna"
    assert data["user"]["preferences"] == {}

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {data['token']}"})
    assert me.json()["data"]["username"] == "anna"


def test_login_unknown_user_and_wrong_password(client):
    register(client, "anna", "pw")
    unknown = client.post("/api/auth/login", json={"username": "bob", "password": "pw"})
    assert unknown.status_code == 400
    assert unknown.json()["error"]["message"] == "User not found"

    wrong = client.post("/api/auth/login", json={"username": "anna", "password": "nope"})
    assert wrong.status_code == 403
    assert wrong.json()["error"]["message"] == "Invalid password"


def test_missing_and_invalid_tokens(client):
    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/auth/me", headers={"Authorization": "Token abc"}).status_code == 401
    resp = client.get("/api/auth/me", headers={"Authorization": "Bearer abc.def.ghi"})
    assert resp.status_code == 403
    assert resp.json()["error"]["code"] == "FORBIDDEN"


def test_update_preferences(client, auth_headers):
    prefs = {
        "subjects": ["Mathematik", "Physik"],
        "semesters": [{"id": "12/1", "start": "2024-08-01", "end": "2025-01-31"}],
        "darkMode": True,
    }
    resp = client.put("/api/auth/me", json={"preferences": prefs}, headers=auth_headers)
    assert resp.status_code == 200
    saved = client.get("/api/auth/me", headers=auth_headers).json()["data"]["preferences"]
    assert saved["subjects"] == ["Mathematik", "Physik"]
    assert saved["semesters"] == prefs["semesters"]
    assert saved["darkMode"] is True


def test_update_preferences_rejects_reversed_range(client, auth_headers):
    prefs = {"semesters": [{"id": "12/1", "start": "2025-02-01", "end": "2024-08-01"}]}
    resp = client.put("/api/auth/me", json={"preferences": prefs}, headers=auth_headers)
    assert resp.status_code == 422
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


def test_delete_account_cascades_grades(client, auth_headers, db_session):
    from models.grades import Grade as GradeModel

    grade = {"subject": "Mathe", "name": "Klausur 1", "score": 12, "semester": "12/1", "type": "big", "date": "2024-10-01"}
    assert client.post("/api/grades/", json=grade, headers=auth_headers).status_code == 200

    resp = client.delete("/api/auth/me", headers=auth_headers)
    assert resp.status_code == 200
    assert db_session.query(GradeModel).count() == 0

    # 탈퇴 후 같은 토큰은 사용 불가
    assert client.get("/api/auth/me", headers=auth_headers).status_code == 401
