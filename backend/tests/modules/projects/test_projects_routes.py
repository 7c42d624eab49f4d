"""Tests for the portfolio project endpoints."""

import pytest


@pytest.fixture
def category(client, admin_secret_headers):
    response = client.post(
        "/api/projects/categories",
        json={"name": "Mobile Apps", "projects": [{"title": "Weather Now", "tags": ["flutter"]}]},
        headers=admin_secret_headers,
    )
    assert response.status_code == 201
    return response.json()


class TestProjectRoutes:
    def test_public_listing(self, client, category):
        (listed,) = client.get("/api/projects").json()["categories"]
        assert listed["slug"] == "mobile-apps"
        assert listed["projects"][0]["id"] == "weather-now"
        assert client.get(f"/api/projects/categories/{category['id']}").json()["name"] == "Mobile Apps"

    def test_project_lifecycle(self, client, category, admin_headers):
        base = "/api/projects/categories/mobile-apps/projects"
        added = client.post(base, json={"title": "Fit Track", "isFeatured": True}, headers=admin_headers)
        assert added.status_code == 201
        assert added.json()["projects"][1]["is_featured"] is True

        updated = client.put(f"{base}/fit-track", json={"previewUrl": "https://fit.example"}, headers=admin_headers)
        assert updated.json()["projects"][1]["preview_url"] == "https://fit.example"

        assert client.delete(f"{base}/weather-now", headers=admin_headers).status_code == 200
        assert client.delete(f"{base}/weather-now", headers=admin_headers).status_code == 404

    def test_non_admin_cannot_add(self, client, category, make_account, bearer):
        member, _ = make_account()
        response = client.post(
            "/api/projects/categories/mobile-apps/projects",
            json={"title": "Sneaky"},
            headers=bearer(member.uid),
        )
        assert response.status_code == 403

    def test_update_category(self, client, category, admin_secret_headers):
        response = client.patch(
            "/api/projects/categories/mobile-apps",
            json={"isActive": False, "description": "Native and cross-platform"},
            headers=admin_secret_headers,
        )
        assert response.json()["is_active"] is False
        assert client.get("/api/projects?is_active=true").json()["categories"] == []
