"""
Tour API Tests
==============

Endpoints exercised through FastAPI's TestClient against a temporary
SQLite store.
"""

import pytest

from tests.conftest import signup


def _create(client, headers, **body):
    payload = {"title": "Demo", "steps": [{"text": "First", "image": "img-1"}]}
    payload.update(body)
    response = client.post("/api/tours", json=payload, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


# ============================================================
# SYSTEM
# ============================================================

class TestSystemEndpoints:
    def test_health(self, api_client):
        response = api_client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root(self, api_client):
        assert api_client.get("/").json()["name"] == "Arcade Tours API"

    def test_security_headers(self, api_client):
        response = api_client.get("/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Process-Time"].endswith("ms")


# ============================================================
# AUTH
# ============================================================

class TestAuth:
    def test_signup_and_me(self, api_client):
        headers = signup(api_client, email="Someone@Example.com")
        me = api_client.get("/api/auth/me", headers=headers)
        assert me.status_code == 200
        assert me.json()["email"] == "someone@example.com"

    def test_duplicate_signup(self, api_client):
        signup(api_client)
        response = api_client.post("/api/auth/signup",
                                   json={"email": "owner@example.com", "password": "other"})
        assert response.status_code == 409

    def test_login(self, api_client):
        signup(api_client)
        response = api_client.post("/api/auth/login",
                                   json={"email": "owner@example.com", "password": "secret-pass"})
        assert response.status_code == 200
        assert response.json()["token_type"] == "bearer"

    def test_login_wrong_password(self, api_client):
        signup(api_client)
        response = api_client.post("/api/auth/login",
                                   json={"email": "owner@example.com", "password": "nope"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    def test_invalid_token(self, api_client):
        response = api_client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401

    def test_missing_token(self, api_client):
        assert api_client.get("/api/tours/my").status_code in (401, 403)


# ============================================================
# TOURS
# ============================================================

class TestTourEndpoints:
    def test_create_assigns_id_and_owner(self, api_client, auth_headers):
        tour = _create(api_client, auth_headers)
        assert tour["id"]
        assert tour["ownerId"]
        assert tour["steps"][0]["id"]
        assert tour["analytics"] == {"views": 0, "shares": 0}
        assert tour["isPublic"] is True

    def test_create_requires_title(self, api_client, auth_headers):
        response = api_client.post("/api/tours", json={"title": "", "steps": []}, headers=auth_headers)
        assert response.status_code == 422

    def test_create_duplicate_id_conflicts(self, api_client, auth_headers):
        _create(api_client, auth_headers, id="fixed-id")
        response = api_client.post("/api/tours", json={"id": "fixed-id", "title": "x"}, headers=auth_headers)
        assert response.status_code == 409

    def test_my_tours_only_lists_own(self, api_client, auth_headers):
        _create(api_client, auth_headers, title="Mine")
        other = signup(api_client, email="other@example.com")
        _create(api_client, other, title="Theirs")

        mine = api_client.get("/api/tours/my", headers=auth_headers).json()
        assert [t["title"] for t in mine] == ["Mine"]

    def test_public_listing(self, api_client, auth_headers):
        _create(api_client, auth_headers, title="Public", isPublic=True)
        _create(api_client, auth_headers, title="Private", isPublic=False)
        titles = [t["title"] for t in api_client.get("/api/tours").json()]
        assert titles == ["Public"]

    def test_update_is_partial(self, api_client, auth_headers):
        tour = _create(api_client, auth_headers, analytics={"views": 5, "shares": 1})
        response = api_client.put(f"/api/tours/{tour['id']}", json={"title": "Renamed"}, headers=auth_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "Renamed"
        assert body["steps"] == tour["steps"]
        assert body["analytics"] == {"views": 5, "shares": 1}
        assert body["createdAt"] == tour["createdAt"]

    def test_update_replaces_steps(self, api_client, auth_headers):
        tour = _create(api_client, auth_headers)
        steps = tour["steps"] + [{"id": "new", "text": "Second", "image": "img-2"}]
        body = api_client.put(f"/api/tours/{tour['id']}", json={"steps": steps}, headers=auth_headers).json()
        assert [s["text"] for s in body["steps"]] == ["First", "Second"]

    def test_update_missing_is_404(self, api_client, auth_headers):
        response = api_client.put("/api/tours/missing", json={"title": "x"}, headers=auth_headers)
        assert response.status_code == 404
        assert response.json() == {"message": "Tour not found"}

    def test_update_other_users_tour_is_404(self, api_client, auth_headers):
        tour = _create(api_client, auth_headers)
        other = signup(api_client, email="other@example.com")
        response = api_client.put(f"/api/tours/{tour['id']}", json={"title": "x"}, headers=other)
        assert response.status_code == 404

    def test_delete(self, api_client, auth_headers):
        tour = _create(api_client, auth_headers)
        response = api_client.delete(f"/api/tours/{tour['id']}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"message": "Tour deleted"}
        assert api_client.get("/api/tours/my", headers=auth_headers).json() == []

    def test_delete_missing_is_404(self, api_client, auth_headers):
        response = api_client.delete("/api/tours/missing", headers=auth_headers)
        assert response.status_code == 404
        assert response.json() == {"message": "Tour not found"}

    def test_routes_live_under_api_prefix(self, api_client):
        assert api_client.get("/api/tours").status_code == 200
        assert api_client.get("/tours").status_code == 404

    @pytest.mark.parametrize("step_id", [1, "1"])
    def test_numeric_step_ids_come_back_as_strings(self, api_client, auth_headers, step_id):
        tour = _create(api_client, auth_headers, steps=[{"id": step_id, "text": "a", "image": "b"}])
        assert tour["steps"][0]["id"] == "1"


class TestSeeding:
    def test_signup_seeds_sample_tours_when_enabled(self, api_client, monkeypatch):
        from apps.tour_portal.api.config import settings
        monkeypatch.setattr(settings, "SEED_FIXTURES", True)

        headers = signup(api_client)
        tours = api_client.get("/api/tours/my", headers=headers).json()
        assert [t["title"] for t in tours] == ["Getting Started with Arcade", "Advanced Settings Overview"]
