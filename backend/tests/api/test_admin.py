"""Tests for the super admin restaurant and statistics endpoints."""

from tests.conftest import seed_restaurant


class TestRestaurantAdmin:
    def test_list_and_detail(self, client, container, owner, admin_headers):
        seed_restaurant(container, name="Le Suspendu", status="suspended")

        listed = client.get("/api/admin/restaurants?status=active", headers=admin_headers)
        assert listed.status_code == 200
        data = listed.json()["data"]
        assert [r["id"] for r in data["restaurants"]] == [owner.restaurant_id]
        assert data["pagination"]["total_items"] == 1

        detail = client.get(f"/api/admin/restaurants/{owner.restaurant_id}", headers=admin_headers)
        assert detail.json()["data"]["stats"] == {"user_count": 1, "ingredient_count": 0}

    def test_invalid_status_filter(self, client, admin_headers):
        response = client.get("/api/admin/restaurants?status=closed", headers=admin_headers)
        assert response.status_code == 400

    def test_suspend_blocks_invitations(self, client, owner, owner_headers, admin_headers):
        """A suspended restaurant cannot take new members."""
        response = client.patch(
            f"/api/admin/restaurants/{owner.restaurant_id}/status",
            json={"status": "suspended"},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["data"]["restaurant"]["status"] == "suspended"

        invited = client.post(
            "/api/users/invite",
            json={"name": "Cook", "email": "cook@example.com"},
            headers=owner_headers,
        )
        assert invited.status_code == 403

    def test_stats(self, client, owner, admin_headers):
        response = client.get("/api/admin/stats", headers=admin_headers)

        assert response.status_code == 200
        stats = response.json()["data"]
        assert stats["total_restaurants"] == 1
        assert stats["total_users"] == 2
        assert stats["kyc"] == {"pending": 0, "approved": 0, "rejected": 0}

    def test_restaurant_admin_is_refused(self, client, owner_headers):
        assert client.get("/api/admin/stats", headers=owner_headers).status_code == 403
