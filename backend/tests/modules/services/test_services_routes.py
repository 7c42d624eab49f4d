"""Tests for the service catalog endpoints."""

import pytest


def _service(title, category, price, tags):
    return {"title": title, "category": category, "basePrice": price, "tags": tags}


@pytest.fixture
def catalog(client, admin_secret_headers):
    for body in (
        _service("Landing Page", "web", 300, ["react", "seo"]),
        _service("Online Store", "web", 1500, ["shopify"]),
        _service("Logo Design", "branding", 150, ["figma"]),
    ):
        assert client.post("/api/services", json=body, headers=admin_secret_headers).status_code == 201


class TestListing:
    def test_pagination(self, client, catalog):
        page = client.get("/api/services?limit=2").json()
        assert page["total"] == 3
        assert len(page["services"]) == 2
        assert page["has_more"] is True
        last = client.get("/api/services?skip=2&limit=2").json()
        assert len(last["services"]) == 1
        assert last["has_more"] is False

    def test_filters(self, client, catalog):
        assert client.get("/api/services?tags=seo,figma").json()["total"] == 2
        assert client.get("/api/services?min_price=200&max_price=1000").json()["total"] == 1
        web = client.get("/api/services/category/web").json()
        assert {s["title"] for s in web["services"]} == {"Landing Page", "Online Store"}

    def test_categories(self, client, catalog):
        assert client.get("/api/services/categories").json() == {"categories": ["branding", "web"]}

    def test_limit_bounds(self, client):
        assert client.get("/api/services?limit=0").status_code == 400
        assert client.get("/api/services?limit=101").status_code == 400


class TestChanges:
    def test_requires_admin(self, client, make_account, bearer):
        member, _ = make_account()
        body = _service("X", "web", 1, [])
        assert client.post("/api/services", json=body).status_code == 401
        assert client.post("/api/services", json=body, headers=bearer(member.uid)).status_code == 403

    def test_update_and_delete(self, client, catalog, admin_headers):
        service = client.get("/api/services/category/branding").json()["services"][0]
        updated = client.patch(f"/api/services/{service['id']}", json={"basePrice": 175}, headers=admin_headers)
        assert updated.json()["base_price"] == 175

        empty = client.put(f"/api/services/{service['id']}", json={}, headers=admin_headers)
        assert empty.status_code == 400
        assert empty.json()["code"] == "EMPTY_UPDATE"

        assert client.delete(f"/api/services/{service['id']}", headers=admin_headers).status_code == 204
        assert client.get(f"/api/services/{service['id']}").status_code == 404

    def test_unknown_ids(self, client, admin_headers):
        assert client.get("/api/services/not-a-uuid").status_code == 404
        assert client.delete("/api/services/not-a-uuid", headers=admin_headers).status_code == 404
