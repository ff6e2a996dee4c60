"""Schema management for the catalog tables."""

from loguru import logger
from sqlmodel import SQLModel

from product_catalog.core.services.database.db_session import DbSessionService


class DbManageService:
    def __init__(self, db_service: DbSessionService):
        self._engine = db_service.engine

    def create_all(self) -> None:
        """Create all database tables."""
        from product_catalog.entities.service.product import ProductTable  # noqa: F401
        from product_catalog.entities.service.subscription_plan import (  # noqa: F401
            SubscriptionPlanTable,
        )

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")

    def drop_all(self) -> None:
        """Drop all catalog tables."""
        SQLModel.metadata.drop_all(self._engine)
        logger.info("Database tables dropped.")
