import re

import pytest

from modules.auth.exceptions import UserAlreadyExistsError
from modules.notifications.exceptions import EmailDeliveryError
from modules.restaurants.exceptions import RestaurantNotActiveError, RestaurantRequiredError
from modules.users.exceptions import (
    InvalidInvitationError,
    ProtectedUserError,
    UserLimitReachedError,
    UserNotInRestaurantError,
)
from modules.users.interfaces import IUserManagementService
from modules.users.models import InviteUserRequest
from shared.exceptions import ValidationError
from shared.models import AccountStatus, KycStatus, Permission, UserRole

from tests.conftest import TEST_PASSWORD, seed_restaurant, seed_user


def invite_request(email: str = "staff@example.com", **overrides) -> InviteUserRequest:
    data = {"name": "Sam Staff", "email": email, "permissions": ["manage_ingredients"]}
    data.update(overrides)
    return InviteUserRequest(**data)


def caller(container, user):
    return container.user_repository.get_by_id(user.id).to_authenticated()


def invitation_token(email_provider, email: str) -> str:
    html = email_provider.last_to(email).html
    return re.search(r"/accept-invite/([0-9a-f]{64})", html).group(1)


class TestInvite:
    def test_satisfies_interface(self, container):
        assert isinstance(container.users, IUserManagementService)

    @pytest.mark.asyncio
    async def test_creates_inactive_staff(self, container, owner, email_provider):
        invited = await container.users.invite(caller(container, owner), invite_request())

        assert invited.role == UserRole.RESTAURANT_STAFF
        assert invited.restaurant_id == owner.restaurant_id
        assert invited.account_status == AccountStatus.INACTIVE
        assert invited.kyc_status == KycStatus.APPROVED
        assert invited.permissions == [Permission.MANAGE_INGREDIENTS]
        assert invited.invited_by == owner.id

        html = email_provider.last_to("staff@example.com").html
        assert "https://app.klarity.test/accept-invite/" in html

    @pytest.mark.asyncio
    async def test_validation(self, container, owner):
        with pytest.raises(ValidationError) as exc_info:
            await container.users.invite(
                caller(container, owner),
                invite_request(email="bad", name="", permissions=["fly"]),
            )
        assert exc_info.value.errors == [
            "Name is required",
            "Invalid permission: fly",
            "Please provide a valid email address",
        ]

    @pytest.mark.asyncio
    async def test_duplicate_email(self, container, owner):
        with pytest.raises(UserAlreadyExistsError):
            await container.users.invite(caller(container, owner), invite_request(email=owner.email))

    @pytest.mark.asyncio
    async def test_seat_limit(self, container, owner, db):
        """Invitations stop once the restaurant's user count reaches max_users."""
        container.restaurant_repository._query().update({"max_users": 2}).eq("id", owner.restaurant_id).execute()
        inviter = caller(container, owner)

        await container.users.invite(inviter, invite_request("one@example.com"))
        with pytest.raises(UserLimitReachedError):
            await container.users.invite(inviter, invite_request("two@example.com"))
        assert len(db.rows("users")) == 2

    @pytest.mark.asyncio
    async def test_suspended_restaurant(self, container, owner):
        await container.restaurants.update_status(owner.restaurant_id, "suspended")
        with pytest.raises(RestaurantNotActiveError):
            await container.users.invite(caller(container, owner), invite_request())

    @pytest.mark.asyncio
    async def test_super_admin_must_name_restaurant(self, container, owner, super_admin):
        admin = caller(container, super_admin)
        with pytest.raises(ValidationError):
            await container.users.invite(admin, invite_request())

        invited = await container.users.invite(admin, invite_request(restaurant_id=owner.restaurant_id))
        assert invited.restaurant_id == owner.restaurant_id

    @pytest.mark.asyncio
    async def test_admin_without_restaurant(self, container):
        loner = seed_user(container, email="loner@example.com", kyc_status="approved")
        with pytest.raises(RestaurantRequiredError):
            await container.users.invite(caller(container, loner), invite_request())

    @pytest.mark.asyncio
    async def test_email_failure_removes_shell_user(self, container, owner, email_provider, db):
        email_provider.fail = True
        with pytest.raises(EmailDeliveryError):
            await container.users.invite(caller(container, owner), invite_request())
        assert container.user_repository.get_by_email("staff@example.com") is None


class TestAcceptInvitation:
    @pytest.mark.asyncio
    async def test_token_is_single_use(self, container, owner, email_provider):
        await container.users.invite(caller(container, owner), invite_request())
        token = invitation_token(email_provider, "staff@example.com")

        result = await container.users.accept_invitation(token, TEST_PASSWORD)
        assert result.user.account_status == AccountStatus.ACTIVE
        assert result.user.is_verified is True
        assert container.tokens.decode(result.token).sub == result.user.id

        with pytest.raises(InvalidInvitationError):
            await container.users.accept_invitation(token, "Another-Pass1")

        login = await container.auth.login("staff@example.com", TEST_PASSWORD)
        assert login.user.role == UserRole.RESTAURANT_STAFF

    @pytest.mark.asyncio
    async def test_expired_token(self, container, owner, email_provider, db):
        await container.users.invite(caller(container, owner), invite_request())
        token = invitation_token(email_provider, "staff@example.com")
        row = next(r for r in db.rows("users") if r["email"] == "staff@example.com")
        row["invitation_expires"] = "2020-01-01T00:00:00+00:00"

        with pytest.raises(InvalidInvitationError):
            await container.users.accept_invitation(token, TEST_PASSWORD)

    @pytest.mark.asyncio
    async def test_requires_token_and_strong_password(self, container):
        with pytest.raises(ValidationError):
            await container.users.accept_invitation(None, TEST_PASSWORD)
        with pytest.raises(ValidationError):
            await container.users.accept_invitation("a" * 64, "weak")


class TestMembership:
    @pytest.fixture
    def staff(self, container, owner):
        return seed_user(
            container,
            email="staff@example.com",
            role=UserRole.RESTAURANT_STAFF,
            restaurant_id=owner.restaurant_id,
            kyc_status="approved",
        )

    @pytest.mark.asyncio
    async def test_list_own_restaurant(self, container, owner, staff):
        seed_restaurant(container, name="Other", admin=seed_user(container, email="other@example.com"))

        result = await container.users.list_restaurant_users(caller(container, owner))
        assert result.count == 2
        assert {u.email for u in result.users} == {owner.email, staff.email}
        assert "password_hash" not in result.users[0].model_dump()

    @pytest.mark.asyncio
    async def test_update_permissions(self, container, owner, staff):
        updated = await container.users.update_permissions(
            caller(container, owner), staff.id, ["manage_stock", "view_reports", "manage_stock"]
        )
        assert updated.permissions == [Permission.MANAGE_STOCK, Permission.VIEW_REPORTS]

    @pytest.mark.asyncio
    async def test_update_permissions_validation(self, container, owner, staff):
        with pytest.raises(ValidationError):
            await container.users.update_permissions(caller(container, owner), staff.id, None)
        with pytest.raises(ValidationError):
            await container.users.update_permissions(caller(container, owner), staff.id, ["bogus"])

    @pytest.mark.asyncio
    async def test_admin_permissions_protected(self, container, owner):
        with pytest.raises(ProtectedUserError):
            await container.users.update_permissions(caller(container, owner), owner.id, ["manage_stock"])

    @pytest.mark.asyncio
    async def test_other_tenant_is_invisible(self, container, owner):
        other_owner = seed_user(container, email="other@example.com")
        other = seed_restaurant(container, name="Other", admin=other_owner)
        outsider = seed_user(
            container,
            email="outsider@example.com",
            role=UserRole.RESTAURANT_STAFF,
            restaurant_id=other.id,
        )

        with pytest.raises(UserNotInRestaurantError):
            await container.users.update_permissions(caller(container, owner), outsider.id, [])
        with pytest.raises(UserNotInRestaurantError):
            await container.users.remove_user(caller(container, owner), outsider.id)

    @pytest.mark.asyncio
    async def test_remove_staff(self, container, owner, staff):
        await container.users.remove_user(caller(container, owner), staff.id)
        assert container.user_repository.get_by_id(staff.id) is None

    @pytest.mark.asyncio
    async def test_cannot_remove_self_or_admin(self, container, owner, super_admin):
        with pytest.raises(ProtectedUserError, match="yourself"):
            await container.users.remove_user(caller(container, owner), owner.id)
        with pytest.raises(ProtectedUserError, match="admin"):
            await container.users.remove_user(caller(container, super_admin), owner.id)
