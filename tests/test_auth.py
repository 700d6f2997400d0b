from models.enums import UserRole
from utils.security import create_refresh_token
from conftest import auth_header


def _register(client, email="new.teacher@ghs.test", password="s3cret-pass", role="TEACHER"):
    return client.post("/v1/auth/register", json={
        "email": email,
        "password": password,
        "first_name": "New",
        "last_name": "Teacher",
        "role": role,
    })


def test_register_login_and_me(client, db):
    res = _register(client)
    assert res.status_code == 201
    assert res.json()["data"]["role"] == "TEACHER"
    assert "password_hash" not in res.json()["data"]

    res = client.post("/v1/auth/login", json={"email": "New.Teacher@ghs.test", "password": "s3cret-pass"})
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["token_type"] == "bearer"
    assert data["user"]["last_login"] is not None

    res = client.get("/v1/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"})
    assert res.json()["data"]["email"] == "new.teacher@ghs.test"


def test_duplicate_email_is_conflict(client, db):
    _register(client)
    res = _register(client)
    assert res.status_code == 409
    assert res.json()["error"] == "CONFLICT"


def test_short_password_is_rejected(client, db):
    res = _register(client, password="short")
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "password"


def test_wrong_password_is_401(client, db):
    _register(client)
    res = client.post("/v1/auth/login", json={"email": "new.teacher@ghs.test", "password": "wrong-pass"})
    assert res.status_code == 401
    assert res.json()["message"] == "Invalid email or password"


def test_refresh_issues_new_pair(client, setup):
    token = create_refresh_token(setup.teacher.id, setup.teacher.email, UserRole.TEACHER.value)

    res = client.post("/v1/auth/refresh", json={"refresh_token": token})

    assert res.status_code == 200
    assert res.json()["data"]["access_token"]


def test_access_token_cannot_be_used_to_refresh(client, setup):
    access = auth_header(setup.teacher)["Authorization"].split(" ", 1)[1]
    res = client.post("/v1/auth/refresh", json={"refresh_token": access})
    assert res.status_code == 401


def test_garbage_token_is_401(client, setup):
    res = client.get("/v1/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert res.status_code == 401
    assert res.json()["success"] is False


def test_health(client):
    res = client.get("/health")
    assert res.json()["status"] == "ok"
    assert "x-latency-ms" in res.headers
