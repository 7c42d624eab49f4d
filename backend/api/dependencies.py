"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its repository or service here,
and route handlers receive them through the get_* dependency functions.
"""

from typing import TYPE_CHECKING, Any

# Type checking imports (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IIdentityProvider, IMailer
    from modules.auth.password_reset import PasswordResetRepository
    from modules.auth.service import AccountService
    from modules.auth.sessions import SessionManager
    from modules.pricing.repository import PricingRepository
    from modules.products.repository import ProductRepository
    from modules.projects.repository import ProjectCategoryRepository
    from modules.services.repository import ServiceRepository
    from modules.team.repository import TeamRepository
    from modules.users.repository import UserRepository


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use override() to inject fakes and reset() to clear everything.
    """

    _SLOTS = (
        "identity_provider",
        "sessions",
        "mailer",
        "users",
        "password_resets",
        "accounts",
        "products",
        "pricing",
        "projects",
        "services",
        "team",
    )

    def __init__(self) -> None:
        self._instances: dict[str, Any] = {}

    def override(self, **instances: Any) -> None:
        """
        Replace services with explicit instances.

        Primarily for testing, e.g. container.override(identity_provider=FakeProvider()).
        """
        for name, instance in instances.items():
            if name not in self._SLOTS:
                raise AttributeError(f"Unknown service: {name}")
            self._instances[name] = instance

    def _db(self):
        from shared.database import get_supabase_client
        return get_supabase_client()

    @property
    def identity_provider(self) -> "IIdentityProvider":
        """Get the identity provider instance."""
        if "identity_provider" not in self._instances:
            from modules.auth.identity import FirebaseIdentityProvider
            self._instances["identity_provider"] = FirebaseIdentityProvider()
        return self._instances["identity_provider"]

    @property
    def sessions(self) -> "SessionManager":
        """Get the session issuer/verifier."""
        if "sessions" not in self._instances:
            from modules.auth.sessions import SessionManager
            self._instances["sessions"] = SessionManager()
        return self._instances["sessions"]

    @property
    def mailer(self) -> "IMailer":
        if "mailer" not in self._instances:
            from modules.auth.mailer import LogMailer
            self._instances["mailer"] = LogMailer()
        return self._instances["mailer"]

    @property
    def users(self) -> "UserRepository":
        """Get the user repository (also the role store)."""
        if "users" not in self._instances:
            from modules.users.repository import UserRepository
            self._instances["users"] = UserRepository(self._db())
        return self._instances["users"]

    @property
    def password_resets(self) -> "PasswordResetRepository":
        if "password_resets" not in self._instances:
            from modules.auth.password_reset import PasswordResetRepository
            self._instances["password_resets"] = PasswordResetRepository(self._db())
        return self._instances["password_resets"]

    @property
    def accounts(self) -> "AccountService":
        """Get the account service instance."""
        if "accounts" not in self._instances:
            from modules.auth.service import AccountService
            self._instances["accounts"] = AccountService(
                provider=self.identity_provider,
                users=self.users,
                resets=self.password_resets,
                mailer=self.mailer,
            )
        return self._instances["accounts"]

    @property
    def products(self) -> "ProductRepository":
        if "products" not in self._instances:
            from modules.products.repository import ProductRepository
            self._instances["products"] = ProductRepository(self._db())
        return self._instances["products"]

    @property
    def pricing(self) -> "PricingRepository":
        if "pricing" not in self._instances:
            from modules.pricing.repository import PricingRepository
            self._instances["pricing"] = PricingRepository(self._db())
        return self._instances["pricing"]

    @property
    def projects(self) -> "ProjectCategoryRepository":
        if "projects" not in self._instances:
            from modules.projects.repository import ProjectCategoryRepository
            self._instances["projects"] = ProjectCategoryRepository(self._db())
        return self._instances["projects"]

    @property
    def services(self) -> "ServiceRepository":
        if "services" not in self._instances:
            from modules.services.repository import ServiceRepository
            self._instances["services"] = ServiceRepository(self._db())
        return self._instances["services"]

    @property
    def team(self) -> "TeamRepository":
        if "team" not in self._instances:
            from modules.team.repository import TeamRepository
            self._instances["team"] = TeamRepository(self._db())
        return self._instances["team"]

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._instances.clear()


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


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


def get_session_manager() -> "SessionManager":
    """FastAPI dependency for the session issuer/verifier."""
    return get_container().sessions


def get_user_repository() -> "UserRepository":
    """FastAPI dependency for the user repository."""
    return get_container().users


def get_identity_provider() -> "IIdentityProvider":
    """FastAPI dependency for the identity provider."""
    return get_container().identity_provider


def get_account_service() -> "AccountService":
    """FastAPI dependency for the account service."""
    return get_container().accounts


def get_product_repository() -> "ProductRepository":
    return get_container().products


def get_pricing_repository() -> "PricingRepository":
    return get_container().pricing


def get_project_repository() -> "ProjectCategoryRepository":
    return get_container().projects


def get_service_repository() -> "ServiceRepository":
    return get_container().services


def get_team_repository() -> "TeamRepository":
    return get_container().team
