"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager

from loguru import logger
from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from diary.runtime.config.config_data import ConfigData, DatabaseConfig
from diary.runtime.context import get_config


class DbSessionService:
    def __init__(self, db_config: DatabaseConfig | None = None, config: ConfigData | None = None):
        """Create the engine for ``db_config`` (defaults to the active configuration)."""

        main_config = config or get_config()
        db_config = db_config or main_config.database
        self._db_config = db_config

        logger.info("Configuring database engine for environment: {}", main_config.app.environment)
        engine_kwargs = {
            "echo": db_config.echo,
            "echo_pool": False,
            "connect_args": self._get_connect_args(db_config, main_config.app.environment),
        }

        if db_config.is_memory:
            # One shared connection, otherwise every session sees an empty database
            engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs.update(
                {
                    "pool_size": db_config.pool_size,
                    "max_overflow": db_config.max_overflow,
                    "pool_timeout": db_config.pool_timeout,
                    "pool_recycle": db_config.pool_recycle,
                    "pool_pre_ping": True,
                }
            )

        self._engine = create_engine(db_config.connection_string, **engine_kwargs)

        if db_config.is_sqlite:
            event.listen(self._engine, "connect", _enable_sqlite_foreign_keys)

        logger.info("Database engine initialized for {}", self._engine.url.render_as_string(hide_password=True))

    @staticmethod
    def _get_connect_args(db_config: DatabaseConfig, environment: str) -> dict:
        """Get database-specific connection arguments."""
        connect_args = {}

        if db_config.url.startswith("postgresql"):
            connect_args.update(
                {
                    "application_name": f"diary_{environment}",
                    "connect_timeout": 30,
                }
            )

        elif db_config.is_sqlite:
            connect_args.update(
                {
                    "check_same_thread": False,
                    "timeout": 20,  # Lock timeout
                }
            )

            if environment == "production":
                logger.warning(
                    "SQLite in production: fine for a single user, "
                    "use PostgreSQL if the diary is shared."
                )

        return connect_args

    @property
    def engine(self):
        return self._engine

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(
            self._engine,
            expire_on_commit=False,  # Rows stay readable after the session closes
            autoflush=True,
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Transactional scope: commit on success, roll back and re-raise on error."""
        db = self.get_session()
        try:
            yield db
            db.commit()
        except Exception as e:
            db.rollback()
            logger.bind(error_type=type(e).__name__).error(
                "Database transaction failed: {}", e
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
        except SQLAlchemyError as e:
            logger.bind(error_type=type(e).__name__).error(
                "Database health check failed: {}", e
            )
            return False

    def dispose(self) -> None:
        """Close every pooled connection."""
        self._engine.dispose()
        logger.info("Database engine disposed")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
