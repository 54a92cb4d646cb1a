from tests.conftest import staff_payload


def _request(client, staff_id, type_="Vacation", start="2026-04-01", end="2026-04-03"):
    r = client.post(
        "/api/v1/time-off/",
        json={"staff_id": staff_id, "type": type_, "start_date": start, "end_date": end},
    )
    assert r.status_code == 201, r.text
    return r.json()


def _staff(client, n):
    return client.post("/api/v1/staff/", json=staff_payload(n)).json()


def test_create_and_approve(client):
    staff = _staff(client, 1)
    req = _request(client, staff["id"])
    assert req["status"] == "Pending"
    assert req["days"] == 3

    r = client.post(f"/api/v1/time-off/{req['id']}/approve")
    assert r.status_code == 200
    assert r.json()["status"] == "Approved"

    r = client.post(f"/api/v1/time-off/{req['id']}/deny")
    assert r.json()["status"] == "Denied"


def test_end_before_start_rejected(client):
    staff = _staff(client, 1)
    r = client.post(
        "/api/v1/time-off/",
        json={"staff_id": staff["id"], "type": "Sick Leave", "start_date": "2026-04-05", "end_date": "2026-04-01"},
    )
    assert r.status_code == 422

    req = _request(client, staff["id"])
    r = client.put(f"/api/v1/time-off/{req['id']}", json={"end_date": "2026-03-01"})
    assert r.status_code == 422
    assert r.json()["error"] == "validation_failure"


def test_list_view_filters_and_stats(client):
    alice = _staff(client, 1)
    bob = _staff(client, 2)
    first = _request(client, alice["id"], "Vacation")
    _request(client, alice["id"], "Sick Leave")
    third = _request(client, bob["id"], "Vacation")
    client.post(f"/api/v1/time-off/{first['id']}/approve")
    client.post(f"/api/v1/time-off/{third['id']}/deny")

    view = client.get("/api/v1/time-off/").json()
    assert view["stats"] == {"total": 3, "pending": 1, "approved": 1, "denied": 1}
    assert view["type_options"] == ["Sick Leave", "Vacation"]
    assert view["items"][0]["staff_name"] == "First2 Last2"

    view = client.get("/api/v1/time-off/", params={"type": "Vacation", "staff": str(alice["id"])}).json()
    assert [r["id"] for r in view["items"]] == [first["id"]]
    assert view["filtered"] == 1
    # stats cover every request, not only the filtered ones
    assert view["stats"]["total"] == 3

    view = client.get("/api/v1/time-off/", params={"status": "Pending"}).json()
    assert view["filtered"] == 1


def test_delete_request(client):
    staff = _staff(client, 1)
    req = _request(client, staff["id"])
    assert client.delete(f"/api/v1/time-off/{req['id']}").status_code == 200
    assert client.get(f"/api/v1/time-off/{req['id']}").status_code == 404
    assert client.post(f"/api/v1/time-off/{req['id']}/approve").status_code == 404
