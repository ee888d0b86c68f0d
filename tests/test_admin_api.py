"""
Tests for admin login and the token-gated quote list/delete endpoints.
"""
from datetime import timedelta

from fastapi.testclient import TestClient

from Login_module.Utils.Security import create_admin_token
from Login_module.Utils.datetime_utils import now_kst
from main import create_app

from conftest import ADMIN_PASSWORD, VALID_QUOTE, BrokenStore, make_settings


class TestAdminLogin:
    """Tests for POST /api/admin/login."""

    def test_login_returns_token(self, client):
        response = client.post("/api/admin/login", json={"password": ADMIN_PASSWORD})

        assert response.status_code == 200
        assert response.json()["token"]

    def test_wrong_password(self, client):
        response = client.post("/api/admin/login", json={"password": "nope"})

        assert response.status_code == 401
        assert "token" not in response.json()
        assert response.json()["message"] == "Invalid password"

    def test_missing_password(self, client):
        assert client.post("/api/admin/login", json={}).status_code == 401
        assert client.post("/api/admin/login").status_code == 401

    def test_login_disabled_without_configured_password(self, tmp_path):
        settings = make_settings(tmp_path, ADMIN_PASSWORD=None)
        with TestClient(create_app(settings)) as client:
            response = client.post("/api/admin/login", json={"password": ""})
            assert response.status_code == 401
            response = client.post("/api/admin/login", json={"password": "anything"})
            assert response.status_code == 401

    def test_login_refused_without_token_secret(self, tmp_path):
        settings = make_settings(tmp_path, ADMIN_TOKEN_SECRET=None)
        with TestClient(create_app(settings)) as client:
            response = client.post("/api/admin/login", json={"password": ADMIN_PASSWORD})
        assert response.status_code == 401


class TestAdminGate:
    """Every admin route rejects requests without a valid token."""

    def test_no_token(self, client):
        assert client.get("/api/admin/quotes").status_code == 401
        assert client.delete("/api/admin/quotes/1").status_code == 401
        assert client.get("/api/admin/notifications/stats").status_code == 401

    def test_garbage_token(self, client):
        headers = {"Authorization": "Bearer not-a-jwt"}
        response = client.get("/api/admin/quotes", headers=headers)

        assert response.status_code == 401
        assert response.json()["message"] == "Unauthorized"

    def test_expired_token(self, client, settings):
        token = create_admin_token(settings, now=now_kst() - timedelta(hours=13))

        response = client.get("/api/admin/quotes", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_token_from_other_secret(self, client, tmp_path):
        other = make_settings(tmp_path, ADMIN_TOKEN_SECRET="another-secret-that-is-long-enough-123")
        token = create_admin_token(other)

        response = client.get("/api/admin/quotes", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_delete_without_token_keeps_row(self, client, store):
        client.post("/api/quotes", json=VALID_QUOTE)
        quote_id = store.list_all()[0].id

        assert client.delete(f"/api/admin/quotes/{quote_id}").status_code == 401
        assert len(store.list_all()) == 1


class TestListQuotes:
    """Tests for GET /api/admin/quotes."""

    def test_empty_list(self, client, admin_headers):
        response = client.get("/api/admin/quotes", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == []

    def test_newest_first(self, client, admin_headers):
        for i in range(4):
            client.post("/api/quotes", json=dict(VALID_QUOTE, eventName=f"Event {i}"))

        response = client.get("/api/admin/quotes", headers=admin_headers)

        assert response.status_code == 200
        quotes = response.json()
        assert len(quotes) == 4
        ids = [q["id"] for q in quotes]
        assert ids == sorted(ids, reverse=True)
        assert quotes[0]["eventName"] == "Event 3"

    def test_quote_shape(self, client, admin_headers):
        client.post("/api/quotes", json=dict(VALID_QUOTE, power="220V"))

        quote = client.get("/api/admin/quotes", headers=admin_headers).json()[0]

        assert set(quote) == {
            "id", "eventName", "eventDate", "eventPlace", "eventDuration", "ledType",
            "ledSize", "ledContent", "power", "extra", "contactName", "contactCompany",
            "contactPhone", "contactEmail", "createdAt",
        }
        assert quote["power"] == "220V"
        assert quote["extra"] == ""
        assert quote["createdAt"]

    def test_storage_failure(self, tmp_path):
        settings = make_settings(tmp_path)
        with TestClient(create_app(settings, store=BrokenStore(settings.SQLITE_PATH))) as client:
            token = client.post("/api/admin/login", json={"password": ADMIN_PASSWORD}).json()["token"]
            headers = {"Authorization": f"Bearer {token}"}

            listed = client.get("/api/admin/quotes", headers=headers)
            deleted = client.delete("/api/admin/quotes/1", headers=headers)

        assert listed.status_code == 500
        assert listed.json()["message"] == "Failed to load quotes"
        assert deleted.status_code == 500
        assert deleted.json()["message"] == "Failed to delete"


class TestDeleteQuote:
    """Tests for DELETE /api/admin/quotes/{id}."""

    def test_delete_removes_only_that_row(self, client, store, admin_headers):
        for i in range(3):
            client.post("/api/quotes", json=dict(VALID_QUOTE, eventName=f"Event {i}"))
        ids = [q.id for q in store.list_all()]
        target = ids[1]

        response = client.delete(f"/api/admin/quotes/{target}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        remaining = [q.id for q in store.list_all()]
        assert remaining == [i for i in ids if i != target]

    def test_delete_missing_id_is_ok(self, client, store, admin_headers):
        client.post("/api/quotes", json=VALID_QUOTE)

        response = client.delete("/api/admin/quotes/9999", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        assert len(store.list_all()) == 1

    def test_delete_twice(self, client, store, admin_headers):
        client.post("/api/quotes", json=VALID_QUOTE)
        quote_id = store.list_all()[0].id

        first = client.delete(f"/api/admin/quotes/{quote_id}", headers=admin_headers)
        second = client.delete(f"/api/admin/quotes/{quote_id}", headers=admin_headers)

        assert first.json() == second.json() == {"ok": True}
        assert store.list_all() == []


class TestNotificationStats:
    """Tests for GET /api/admin/notifications/stats."""

    def test_counts_follow_submissions(self, client, admin_headers):
        client.post("/api/quotes", json=VALID_QUOTE)
        client.post("/api/quotes", json=VALID_QUOTE)

        response = client.get("/api/admin/notifications/stats", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {
            "email": {"sent": 2, "skipped": 0, "failed": 0},
            "sms": {"sent": 2, "skipped": 0, "failed": 0},
        }
