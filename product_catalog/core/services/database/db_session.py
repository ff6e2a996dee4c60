"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy import event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from product_catalog.core.exceptions import DomainError
from product_catalog.runtime.config.config_data import DatabaseConfig
from product_catalog.runtime.context import get_config


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    # SQLite ships with FK enforcement off, plans rely on ON DELETE CASCADE
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DbSessionService:
    def __init__(
        self,
        database_config: DatabaseConfig | None = None,
        environment: str | None = None,
    ):
        """Initialize the shared database engine and session factory.

        Args:
            database_config: Explicit database settings; the active application
                config is used when omitted.
            environment: Application environment used for connection tagging.
        """
        if database_config is None or environment is None:
            main_config = get_config()
            database_config = database_config or main_config.database
            environment = environment or main_config.app.environment

        self._config = database_config
        self._environment = environment

        logger.info("Configuring database engine for environment: {}", environment)
        engine_kwargs = self._get_engine_kwargs()
        self._engine = create_engine(database_config.connection_string, **engine_kwargs)

        if database_config.is_sqlite:
            event.listen(self._engine, "connect", _enable_sqlite_foreign_keys)

        if environment == "production":
            logger.info(
                "Database engine initialized",
                extra={
                    "pool_size": database_config.pool_size,
                    "max_overflow": database_config.max_overflow,
                    "pool_timeout": database_config.pool_timeout,
                    "pool_recycle": database_config.pool_recycle,
                },
            )

    @property
    def engine(self) -> Engine:
        return self._engine

    def _get_engine_kwargs(self) -> dict[str, Any]:
        db_config = self._config
        engine_kwargs: dict[str, Any] = {
            "echo": db_config.echo,
            "echo_pool": False,
            "connect_args": self._get_connect_args(),
        }

        if db_config.is_sqlite:
            if make_url(db_config.url).database in (None, "", ":memory:"):
                # One shared connection, otherwise every session sees an empty db
                engine_kwargs["poolclass"] = StaticPool
            return engine_kwargs

        engine_kwargs.update(
            {
                "pool_size": db_config.pool_size,
                "max_overflow": db_config.max_overflow,
                "pool_timeout": db_config.pool_timeout,
                "pool_recycle": db_config.pool_recycle,
                "pool_pre_ping": True,
            }
        )
        return engine_kwargs

    def _get_connect_args(self) -> dict[str, Any]:
        """Get database-specific connection arguments."""
        connect_args: dict[str, Any] = {}

        if self._config.is_sqlite:
            connect_args.update(
                {
                    "check_same_thread": False,  # Sessions run on gRPC worker threads
                    "timeout": 20,  # Lock timeout
                }
            )

            if self._environment == "production":
                logger.warning(
                    "SQLite is not recommended for production use. "
                    "Consider PostgreSQL for better performance and reliability."
                )

        elif make_url(self._config.url).get_backend_name() == "postgresql":
            connect_args.update(
                {
                    "application_name": f"{self._environment}_product_catalog",
                    "connect_timeout": 30,
                }
            )

        return connect_args

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(
            self._engine,
            expire_on_commit=False,
            autoflush=True,
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Transactional scope: commit on success, rollback and re-raise on error."""
        db = self.get_session()
        try:
            yield db
            db.commit()
        except DomainError:
            db.rollback()
            raise
        except Exception as e:
            db.rollback()
            logger.error(
                "Database transaction failed: {}: {}",
                type(e).__name__,
                e,
            )
            raise
        finally:
            db.close()

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.error(
                "Database health check failed: {}: {}",
                type(e).__name__,
                e,
            )
            return False

    def get_pool_status(self) -> dict[str, int]:
        """Get current connection pool status for monitoring."""
        pool = self._engine.pool
        return {
            "size": getattr(pool, "size", lambda: 0)(),
            "checked_in": getattr(pool, "checkedin", lambda: 0)(),
            "checked_out": getattr(pool, "checkedout", lambda: 0)(),
            "overflow": getattr(pool, "overflow", lambda: 0)(),
        }

    def dispose(self) -> None:
        self._engine.dispose()
