import pytest
from unittest.mock import patch

from modules.ingredients.exceptions import IngredientHasNoImageError, IngredientNotFoundError
from modules.ingredients.interfaces import IIngredientService
from modules.ingredients.models import CreateIngredientRequest, UpdateIngredientRequest
from modules.ingredients.repository import IngredientRepository
from modules.ingredients.service import IngredientService
from modules.restaurants.exceptions import RestaurantRequiredError
from providers.local_storage import LocalImageStorage
from shared.exceptions import ValidationError
from shared.uploads import UploadedFile

from tests.conftest import seed_restaurant, seed_user

PNG = b"\x89PNG\r\n\x1a\n" + b"0" * 32


def image(filename: str = "tomato.png", content_type: str = "image/png", content: bytes = PNG) -> UploadedFile:
    return UploadedFile(field="image", filename=filename, content_type=content_type, content=content)


@pytest.fixture
def member(container, owner):
    return container.user_repository.get_by_id(owner.id).to_authenticated()


@pytest.fixture
def outsider(container):
    other_owner = seed_user(container, email="other@example.com")
    seed_restaurant(container, name="Other", admin=other_owner)
    return container.user_repository.get_by_id(other_owner.id).to_authenticated()


async def create(container, member, name="Tomato"):
    return await container.ingredients.create_ingredient(
        member, CreateIngredientRequest(name=name, unit="kg", category="vegetables")
    )


class TestIngredientCrud:
    def test_satisfies_interface(self, container):
        assert isinstance(container.ingredients, IIngredientService)

    @pytest.mark.asyncio
    async def test_create_and_list(self, container, member):
        await create(container, member, "Tomato")
        await create(container, member, "Basil")

        ingredients = await container.ingredients.list_ingredients(member)
        assert [i.name for i in ingredients] == ["Basil", "Tomato"]
        assert all(i.restaurant_id == member.restaurant_id for i in ingredients)
        assert ingredients[0].created_by == member.id

    @pytest.mark.asyncio
    async def test_name_required(self, container, member):
        with pytest.raises(ValidationError):
            await container.ingredients.create_ingredient(member, CreateIngredientRequest(name="  "))

    @pytest.mark.asyncio
    async def test_requires_restaurant(self, container):
        loner = seed_user(container, email="loner@example.com").to_authenticated()
        with pytest.raises(RestaurantRequiredError):
            await container.ingredients.list_ingredients(loner)

    @pytest.mark.asyncio
    async def test_tenant_isolation(self, container, member, outsider):
        """Another restaurant's ingredient reads as missing."""
        ingredient = await create(container, member)

        with pytest.raises(IngredientNotFoundError):
            await container.ingredients.get_ingredient(outsider, ingredient.id)
        with pytest.raises(IngredientNotFoundError):
            await container.ingredients.delete_ingredient(outsider, ingredient.id)
        assert await container.ingredients.list_ingredients(outsider) == []

    @pytest.mark.asyncio
    async def test_partial_update(self, container, member):
        ingredient = await create(container, member)
        updated = await container.ingredients.update_ingredient(
            member, ingredient.id, UpdateIngredientRequest(unit="g")
        )
        assert updated.unit == "g"
        assert updated.name == "Tomato"

    @pytest.mark.asyncio
    async def test_update_blank_name(self, container, member):
        ingredient = await create(container, member)
        with pytest.raises(ValidationError):
            await container.ingredients.update_ingredient(
                member, ingredient.id, UpdateIngredientRequest(name=" ")
            )

    @pytest.mark.asyncio
    async def test_delete_discards_image(self, container, member, storage):
        ingredient = await create(container, member)
        result = await container.ingredients.upload_image(member, ingredient.id, image(), "http://testserver/")

        await container.ingredients.delete_ingredient(member, ingredient.id)
        assert result.image in storage.deleted
        with pytest.raises(IngredientNotFoundError):
            await container.ingredients.get_ingredient(member, ingredient.id)


class TestIngredientImages:
    @pytest.mark.asyncio
    async def test_upload(self, container, member, storage):
        ingredient = await create(container, member)
        result = await container.ingredients.upload_image(member, ingredient.id, image(), "http://testserver/")

        assert "/ingredients/" in result.image
        assert result.full_url == result.image
        assert storage.files[result.image] == PNG
        stored = await container.ingredients.get_ingredient(member, ingredient.id)
        assert stored.image == result.image

    @pytest.mark.asyncio
    async def test_replacing_deletes_previous(self, container, member, storage):
        ingredient = await create(container, member)
        first = await container.ingredients.upload_image(member, ingredient.id, image(), "http://testserver/")
        second = await container.ingredients.upload_image(member, ingredient.id, image("b.png"), "http://testserver/")

        assert first.image in storage.deleted
        assert second.image in storage.files

    @pytest.mark.asyncio
    async def test_failed_update_keeps_previous_image(self, container, member, storage):
        """Should drop the new file and leave the recorded image in place."""
        ingredient = await create(container, member)
        first = await container.ingredients.upload_image(member, ingredient.id, image(), "http://testserver/")

        with patch.object(container.ingredient_repository, "update", side_effect=RuntimeError("db down")):
            with pytest.raises(RuntimeError):
                await container.ingredients.upload_image(member, ingredient.id, image("b.png"), "http://testserver/")

        assert list(storage.files) == [first.image]
        assert first.image not in storage.deleted
        current = await container.ingredients.get_ingredient(member, ingredient.id)
        assert current.image == first.image

    @pytest.mark.asyncio
    async def test_missing_file(self, container, member):
        ingredient = await create(container, member)
        with pytest.raises(ValidationError) as exc_info:
            await container.ingredients.upload_image(member, ingredient.id, None, "http://testserver/")
        assert exc_info.value.errors == ["Please upload an image file"]

    @pytest.mark.asyncio
    async def test_wrong_type(self, container, member):
        ingredient = await create(container, member)
        with pytest.raises(ValidationError):
            await container.ingredients.upload_image(
                member, ingredient.id, image("notes.pdf", "application/pdf"), "http://testserver/"
            )

    @pytest.mark.asyncio
    async def test_too_large(self, container, member):
        ingredient = await create(container, member)
        big = b"0" * (container.settings.max_image_size_bytes + 1)
        with pytest.raises(ValidationError) as exc_info:
            await container.ingredients.upload_image(member, ingredient.id, image(content=big), "http://testserver/")
        assert "5.0 MB" in exc_info.value.errors[0]

    @pytest.mark.asyncio
    async def test_local_urls_get_base(self, settings, db, member, tmp_path):
        """Files served from /uploads are returned with an absolute full_url."""
        service = IngredientService(IngredientRepository(db), LocalImageStorage(tmp_path), settings)
        ingredient = await service.create_ingredient(member, CreateIngredientRequest(name="Salt"))
        result = await service.upload_image(member, ingredient.id, image(), "http://testserver/")

        assert result.image.startswith("/uploads/ingredients/")
        assert result.full_url == f"http://testserver{result.image}"
        assert (tmp_path / result.image.removeprefix("/uploads/")).read_bytes() == PNG

    @pytest.mark.asyncio
    async def test_delete_image(self, container, member, storage):
        ingredient = await create(container, member)
        uploaded = await container.ingredients.upload_image(member, ingredient.id, image(), "http://testserver/")

        cleared = await container.ingredients.delete_image(member, ingredient.id)
        assert cleared.image is None
        assert uploaded.image in storage.deleted

        with pytest.raises(IngredientHasNoImageError):
            await container.ingredients.delete_image(member, ingredient.id)

    @pytest.mark.asyncio
    async def test_storage_delete_failure_is_logged(self, container, member, storage, caplog):
        ingredient = await create(container, member)
        await container.ingredients.upload_image(member, ingredient.id, image(), "http://testserver/")

        async def broken(url):
            raise RuntimeError("cdn down")

        storage.delete = broken
        cleared = await container.ingredients.delete_image(member, ingredient.id)
        assert cleared.image is None
        assert "cdn down" in caplog.text
