"""Integration tests for health, the static app, metrics and reset."""

from __future__ import annotations

from tests.helpers.auth import bearer


def test_healthz(client) -> None:
    resp = client.get("/api/healthz")

    assert resp.status_code == 200
    assert resp.data == b"OK"
    assert resp.content_type.startswith("text/plain")


def test_fileserver_hits_are_counted(client) -> None:
    assert "visited 0 times" in client.get("/admin/metrics").get_data(as_text=True)

    assert client.get("/app/").status_code == 200
    client.get("/app/index.html")
    client.get("/app/missing.png")

    page = client.get("/admin/metrics")
    assert page.content_type.startswith("text/html")
    assert "Chirpy has been visited 3 times!" in page.get_data(as_text=True)


def test_files_are_served_by_name(client) -> None:
    resp = client.get("/app/index.html")

    assert resp.status_code == 200
    assert b"Welcome to Chirpy" in resp.data
    assert "visited 1 times" in client.get("/admin/metrics").get_data(as_text=True)


def test_api_requests_are_not_counted(client) -> None:
    client.get("/api/healthz")
    client.get("/api/chirps")

    assert "visited 0 times" in client.get("/admin/metrics").get_data(as_text=True)


def test_reset_clears_users_and_hits(client, login) -> None:
    session = login()
    client.post("/api/chirps", json={"body": "soon gone"}, headers=bearer(session["token"]))
    client.get("/app/")

    resp = client.post("/admin/reset")

    assert resp.status_code == 200
    assert "visited 0 times" in client.get("/admin/metrics").get_data(as_text=True)
    assert client.get("/api/chirps").get_json() == []
    assert client.post("/api/refresh", headers=bearer(session["refresh_token"])).status_code == 401
    # the access token is still correctly signed, but its user is gone
    assert client.put(
        "/api/users", json={"email": "x@example.com", "password": "long-enough"}, headers=bearer(session["token"])
    ).status_code == 401


def test_reset_is_dev_only(app, client) -> None:
    app.config["PLATFORM"] = "prod"

    assert client.post("/admin/reset").status_code == 403
