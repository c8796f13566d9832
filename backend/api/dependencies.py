"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

When we're ready to extract a module to a microservice, we only need
to change the implementation here to an HTTP client.
"""

from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from supabase import Client

    from modules.auth.interfaces import IAuthService
    from modules.auth.repository import UserRepository
    from modules.auth.security import PasswordHasher, TokenManager
    from modules.ingredients.interfaces import IIngredientService
    from modules.ingredients.repository import IngredientRepository
    from modules.kyc.interfaces import IKycService
    from modules.kyc.repository import KycRepository
    from modules.notifications.interfaces import INotificationService
    from modules.restaurants.interfaces import IRestaurantService
    from modules.restaurants.repository import RestaurantRepository
    from modules.users.interfaces import IUserManagementService
    from providers.base import EmailProvider, ImageStorage


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    The database client, email provider and image storage can be injected,
    which is how tests swap in fakes; otherwise they are built from settings.
    Use reset() to clear all cached services.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        db: "Client | None" = None,
        email_provider: "EmailProvider | None" = None,
        storage: "ImageStorage | None" = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._db = db
        self._email_provider = email_provider
        self._storage = storage
        self.reset()

    def reset(self) -> None:
        """
        Reset all cached services.

        Injected collaborators are kept; everything built from them is
        recreated on next access.
        """
        self._user_repository: "UserRepository | None" = None
        self._restaurant_repository: "RestaurantRepository | None" = None
        self._kyc_repository: "KycRepository | None" = None
        self._ingredient_repository: "IngredientRepository | None" = None
        self._hasher: "PasswordHasher | None" = None
        self._tokens: "TokenManager | None" = None
        self._notifications: "INotificationService | None" = None
        self._auth_service: "IAuthService | None" = None
        self._restaurant_service: "IRestaurantService | None" = None
        self._kyc_service: "IKycService | None" = None
        self._user_management_service: "IUserManagementService | None" = None
        self._ingredient_service: "IIngredientService | None" = None

    # -------------------------------------------------------------------------
    # Infrastructure
    # -------------------------------------------------------------------------

    @property
    def db(self) -> "Client":
        if self._db is None:
            from shared.database import get_supabase_client
            self._db = get_supabase_client(self.settings)
        return self._db

    @property
    def storage(self) -> "ImageStorage":
        if self._storage is None:
            from providers.factory import get_image_storage
            self._storage = get_image_storage(self.settings)
        return self._storage

    @property
    def notifications(self) -> "INotificationService":
        if self._notifications is None:
            from modules.notifications.service import NotificationService
            from providers.factory import get_email_provider
            provider = self._email_provider or get_email_provider(self.settings)
            self._notifications = NotificationService(provider, self.settings)
        return self._notifications

    @property
    def hasher(self) -> "PasswordHasher":
        if self._hasher is None:
            from modules.auth.security import PasswordHasher
            self._hasher = PasswordHasher(self.settings.bcrypt_rounds)
        return self._hasher

    @property
    def tokens(self) -> "TokenManager":
        if self._tokens is None:
            from modules.auth.security import TokenManager
            self._tokens = TokenManager(self.settings)
        return self._tokens

    # -------------------------------------------------------------------------
    # Repositories
    # -------------------------------------------------------------------------

    @property
    def user_repository(self) -> "UserRepository":
        if self._user_repository is None:
            from modules.auth.repository import UserRepository
            self._user_repository = UserRepository(self.db)
        return self._user_repository

    @property
    def restaurant_repository(self) -> "RestaurantRepository":
        if self._restaurant_repository is None:
            from modules.restaurants.repository import RestaurantRepository
            self._restaurant_repository = RestaurantRepository(self.db)
        return self._restaurant_repository

    @property
    def kyc_repository(self) -> "KycRepository":
        if self._kyc_repository is None:
            from modules.kyc.repository import KycRepository
            self._kyc_repository = KycRepository(self.db)
        return self._kyc_repository

    @property
    def ingredient_repository(self) -> "IngredientRepository":
        if self._ingredient_repository is None:
            from modules.ingredients.repository import IngredientRepository
            self._ingredient_repository = IngredientRepository(self.db)
        return self._ingredient_repository

    # -------------------------------------------------------------------------
    # Services
    # -------------------------------------------------------------------------

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                repository=self.user_repository,
                notifications=self.notifications,
                settings=self.settings,
                hasher=self.hasher,
                tokens=self.tokens,
            )
        return self._auth_service

    @property
    def restaurants(self) -> "IRestaurantService":
        """Get the restaurant service instance."""
        if self._restaurant_service is None:
            from modules.restaurants.service import RestaurantService
            self._restaurant_service = RestaurantService(
                repository=self.restaurant_repository,
                users=self.user_repository,
                ingredients=self.ingredient_repository,
                kyc=self.kyc_repository,
                settings=self.settings,
            )
        return self._restaurant_service

    @property
    def kyc(self) -> "IKycService":
        """Get the KYC service instance."""
        if self._kyc_service is None:
            from modules.kyc.service import KycService
            self._kyc_service = KycService(
                repository=self.kyc_repository,
                users=self.user_repository,
                restaurants=self.restaurants,
                notifications=self.notifications,
                storage=self.storage,
                settings=self.settings,
            )
        return self._kyc_service

    @property
    def users(self) -> "IUserManagementService":
        """Get the user management service instance."""
        if self._user_management_service is None:
            from modules.users.service import UserManagementService
            self._user_management_service = UserManagementService(
                users=self.user_repository,
                restaurants=self.restaurants,
                notifications=self.notifications,
                hasher=self.hasher,
                tokens=self.tokens,
                settings=self.settings,
            )
        return self._user_management_service

    @property
    def ingredients(self) -> "IIngredientService":
        """Get the ingredient service instance."""
        if self._ingredient_service is None:
            from modules.ingredients.service import IngredientService
            self._ingredient_service = IngredientService(
                repository=self.ingredient_repository,
                storage=self.storage,
                settings=self.settings,
            )
        return self._ingredient_service


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def set_container(container: ServiceContainer) -> None:
    """Install a pre-built container (tests, management scripts)."""
    global _container
    _container = container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_restaurant_service() -> "IRestaurantService":
    """FastAPI dependency for restaurant service."""
    return get_container().restaurants


def get_kyc_service() -> "IKycService":
    """FastAPI dependency for KYC service."""
    return get_container().kyc


def get_user_management_service() -> "IUserManagementService":
    """FastAPI dependency for user management service."""
    return get_container().users


def get_ingredient_service() -> "IIngredientService":
    """FastAPI dependency for ingredient service."""
    return get_container().ingredients
