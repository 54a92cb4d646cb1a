from tests.conftest import ADMIN_EMAIL, login


def test_api_requires_login(anon_client):
    r = anon_client.get("/api/v1/staff/")
    assert r.status_code == 401
    assert r.json()["error"] == "unauthenticated"
    assert anon_client.get("/auth/me").status_code == 401


def test_health_is_public(anon_client):
    assert anon_client.get("/health").json() == {"status": "ok"}


def test_login_me_logout(anon_client):
    user = login(anon_client, ADMIN_EMAIL, "admin")
    assert user["email"] == ADMIN_EMAIL
    assert user["role"] == "ADMIN"

    me = anon_client.get("/auth/me").json()
    assert me["id"] == user["id"]

    anon_client.post("/auth/logout")
    assert anon_client.get("/api/v1/dashboard").status_code == 401


def test_login_with_local_part_only(anon_client):
    assert login(anon_client, "admin", "admin")["email"] == ADMIN_EMAIL


def test_bad_credentials(anon_client, make_user):
    r = anon_client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": "wrong"})
    assert r.status_code == 401

    make_user("gone@company.com", "pw", is_active=False)
    r = anon_client.post("/auth/login", json={"email": "gone@company.com", "password": "pw"})
    assert r.status_code == 401
