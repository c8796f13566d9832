"""Tests for the /api/ingredients endpoints."""

import pytest

from tests.conftest import auth_headers_for, seed_user


@pytest.fixture
def staff(container, owner):
    return seed_user(
        container,
        email="staff@example.com",
        role="restaurant_staff",
        restaurant_id=owner.restaurant_id,
        kyc_status="approved",
    )


class TestIngredientEndpoints:
    def test_crud(self, client, owner_headers):
        created = client.post(
            "/api/ingredients",
            json={"name": "Tomato", "unit": "kg", "category": "Vegetables"},
            headers=owner_headers,
        )
        assert created.status_code == 201
        ingredient_id = created.json()["data"]["ingredient"]["id"]

        listed = client.get("/api/ingredients", headers=owner_headers).json()["data"]
        assert listed["count"] == 1

        updated = client.patch(f"/api/ingredients/{ingredient_id}", json={"unit": "g"}, headers=owner_headers)
        assert updated.json()["data"]["ingredient"]["unit"] == "g"

        deleted = client.delete(f"/api/ingredients/{ingredient_id}", headers=owner_headers)
        assert deleted.status_code == 200
        assert client.get(f"/api/ingredients/{ingredient_id}", headers=owner_headers).status_code == 404

    def test_staff_without_permission_can_only_read(self, client, container, owner_headers, staff):
        """Writes need manage_ingredients; reads only need membership."""
        client.post("/api/ingredients", json={"name": "Tomato"}, headers=owner_headers)
        headers = auth_headers_for(container, staff)

        assert client.get("/api/ingredients", headers=headers).status_code == 200
        refused = client.post("/api/ingredients", json={"name": "Onion"}, headers=headers)
        assert refused.status_code == 403
        assert refused.json()["error"]["code"] == "INSUFFICIENT_PERMISSIONS"

    def test_staff_with_permission(self, client, container, staff):
        container.user_repository.update(staff.id, {"permissions": ["manage_ingredients"]})
        headers = auth_headers_for(container, staff)

        response = client.post("/api/ingredients", json={"name": "Onion"}, headers=headers)
        assert response.status_code == 201

    def test_image_upload(self, client, owner_headers, storage):
        created = client.post("/api/ingredients", json={"name": "Tomato"}, headers=owner_headers)
        ingredient_id = created.json()["data"]["ingredient"]["id"]

        response = client.post(
            f"/api/ingredients/{ingredient_id}/image",
            files={"image": ("tomato.png", b"\x89PNG", "image/png")},
            headers=owner_headers,
        )

        assert response.status_code == 200
        image = response.json()["data"]["image"]
        assert image in storage.files

        removed = client.delete(f"/api/ingredients/{ingredient_id}/image", headers=owner_headers)
        assert removed.status_code == 200
        assert image in storage.deleted

    def test_image_required(self, client, owner_headers):
        created = client.post("/api/ingredients", json={"name": "Tomato"}, headers=owner_headers)
        ingredient_id = created.json()["data"]["ingredient"]["id"]

        response = client.post(f"/api/ingredients/{ingredient_id}/image", headers=owner_headers)
        assert response.status_code == 400

    def test_oversized_image_rejected(self, client, container, owner_headers, storage):
        created = client.post("/api/ingredients", json={"name": "Tomato"}, headers=owner_headers)
        ingredient_id = created.json()["data"]["ingredient"]["id"]
        big = b"0" * (container.settings.max_image_size_bytes + 4096)

        response = client.post(
            f"/api/ingredients/{ingredient_id}/image",
            files={"image": ("tomato.png", big, "image/png")},
            headers=owner_headers,
        )

        assert response.status_code == 400
        assert "image: file exceeds the maximum size of 5.0 MB" in response.json()["errors"]
        assert storage.files == {}
