from dataclasses import dataclass

from product_catalog.core.services import Authenticator, DbSessionService


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    authenticator: Authenticator
