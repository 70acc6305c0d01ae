import os
import tempfile

import pytest

# ✅ 앱/설정 import 전에 테스트용 SQLite 경로 지정
_TMP_DIR = tempfile.mkdtemp(prefix="grade-tracker-")
os.environ["DB_URL_OVERRIDE"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["ENV"] = "test"
os.environ["JWT_SECRET"] = "test-secret"

from fastapi.testclient import TestClient  # noqa: E402

from database.db import Base, SessionLocal, engine, init_db  # noqa: E402
from main import app  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def _schema():
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(autouse=True)
def _clean_tables():
    yield
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture()
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def register(client, username="student", password="secret"):
    resp = client.post("/api/auth/register", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]


@pytest.fixture()
def auth_headers(client):
    token = register(client)["token"]
    return {"Authorization": f"Bearer {token}"}
