"""Tests for the database session service."""

import pytest
from sqlalchemy import inspect, text

from product_catalog.core.exceptions import NotFound
from product_catalog.core.services.database import DbManageService, DbSessionService
from product_catalog.entities.service.product import ProductRepository, ProductTable
from product_catalog.runtime.config.config_data import DatabaseConfig


class TestDbSessionService:
    """Test engine setup and transactional scopes."""

    def test_health_check(self, db_service):
        assert db_service.health_check() is True

    def test_sqlite_foreign_keys_enabled(self, db_service):
        with db_service.engine.connect() as connection:
            assert connection.execute(text("PRAGMA foreign_keys")).scalar() == 1

    def test_tables_created(self, db_service):
        tables = inspect(db_service.engine).get_table_names()

        assert {"products", "subscription_plans"} <= set(tables)

    def test_session_scope_commits(self, db_service, digital_product):
        with db_service.session_scope() as session:
            ProductRepository(session).create(digital_product)

        with db_service.session_scope() as session:
            assert ProductRepository(session).get(digital_product.id) is not None

    def test_session_scope_rolls_back_on_error(self, db_service, digital_product):
        with pytest.raises(RuntimeError):
            with db_service.session_scope() as session:
                ProductRepository(session).create(digital_product)
                raise RuntimeError("boom")

        with db_service.session_scope() as session:
            assert ProductRepository(session).get(digital_product.id) is None

    def test_session_scope_rolls_back_on_domain_error(
        self, db_service, digital_product
    ):
        with pytest.raises(NotFound):
            with db_service.session_scope() as session:
                ProductRepository(session).create(digital_product)
                raise NotFound("product not found")

        with db_service.session_scope() as session:
            assert session.get(ProductTable, digital_product.id) is None

    def test_pool_status(self, db_service):
        status = db_service.get_pool_status()

        assert set(status) == {"size", "checked_in", "checked_out", "overflow"}

    def test_unreachable_database_fails_health_check(self, tmp_path):
        missing_dir = tmp_path / "missing" / "catalog.db"
        service = DbSessionService(
            DatabaseConfig(url=f"sqlite:///{missing_dir}", environment_mode="test"),
            environment="test",
        )

        assert service.health_check() is False


class TestDbManageService:
    def test_drop_all(self, db_service):
        DbManageService(db_service).drop_all()

        assert inspect(db_service.engine).get_table_names() == []
