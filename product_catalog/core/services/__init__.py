"""Core services exports."""

from .auth_service import Authenticator, CredentialStore, InMemoryCredentialStore
from .database.db_manage import DbManageService
from .database.db_session import DbSessionService
from .product_service import ProductService
from .subscription_service import SubscriptionService

__all__ = [
    # Authentication
    "Authenticator",
    "CredentialStore",
    "InMemoryCredentialStore",
    # Database
    "DbManageService",
    "DbSessionService",
    # Domain
    "ProductService",
    "SubscriptionService",
]
