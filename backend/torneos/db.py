import os
import logging
from typing import Any, Dict, List, Optional

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from torneos.models.tables import metadata
from torneos.utils.errors import PersistenceError

logger = logging.getLogger(__name__)

# SQLSTATE codes reported by PostgreSQL
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


class UniqueViolation(PersistenceError):
    """A unique constraint or index rejected the statement."""


class ForeignKeyViolation(PersistenceError):
    """A foreign key constraint rejected the statement."""


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ships with foreign keys (and ON DELETE CASCADE) turned off
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _translate_integrity_error(exc: IntegrityError) -> PersistenceError:
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    message = str(orig)

    if code == UNIQUE_VIOLATION or "UNIQUE constraint failed" in message:
        return UniqueViolation(message)
    if code == FOREIGN_KEY_VIOLATION or "FOREIGN KEY constraint failed" in message:
        return ForeignKeyViolation(message)
    return PersistenceError(f"Integrity error: {message}")


class Database:
    """
    Persistence handle owning the async engine.

    Every call borrows one connection for the duration of a single
    transaction and gives it back when the block exits, whether it
    committed or failed. Constraint violations come back as
    UniqueViolation / ForeignKeyViolation, anything else the driver
    raises comes back as PersistenceError.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        engine_kwargs: Dict[str, Any] = {"echo": echo}
        if url.startswith("sqlite"):
            engine_kwargs["poolclass"] = NullPool
        else:
            engine_kwargs["pool_pre_ping"] = True

        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)

        if url.startswith("sqlite"):
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    async def fetch_all(self, statement) -> List[Dict[str, Any]]:
        """Run a statement and return every row as a dict."""
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(statement)
                rows = [dict(row) for row in result.mappings().all()]
        except IntegrityError as e:
            raise _translate_integrity_error(e) from e
        except SQLAlchemyError as e:
            logger.error("Query failed: %s", e)
            raise PersistenceError(f"Query execution failed: {e}") from e

        logger.debug("Fetch all returned %d rows", len(rows))
        return rows

    async def fetch_one(self, statement) -> Optional[Dict[str, Any]]:
        """Run a statement and return the first row, or None."""
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(statement)
                row = result.mappings().first()
        except IntegrityError as e:
            raise _translate_integrity_error(e) from e
        except SQLAlchemyError as e:
            logger.error("Query failed: %s", e)
            raise PersistenceError(f"Query execution failed: {e}") from e

        return dict(row) if row is not None else None

    async def execute(self, statement) -> int:
        """Run a data-modifying statement and return the affected row count."""
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(statement)
                affected = result.rowcount
        except IntegrityError as e:
            raise _translate_integrity_error(e) from e
        except SQLAlchemyError as e:
            logger.error("Statement failed: %s", e)
            raise PersistenceError(f"Statement execution failed: {e}") from e

        logger.debug("Statement affected %d rows", affected)
        return affected

    async def create_schema(self):
        async with self.engine.begin() as conn:
            await conn.run_sync(metadata.create_all)

    async def drop_schema(self):
        async with self.engine.begin() as conn:
            await conn.run_sync(metadata.drop_all)

    async def ping(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning("Database ping failed: %s", e)
            return False

    async def dispose(self):
        await self.engine.dispose()


def init_db(app):
    database_url = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./torneos.db")
    echo = os.getenv("SQL_ECHO", "false").lower() == "true"
    db = Database(database_url, echo=echo)
    app.state.db = db
    return db


def get_db(request: Request) -> Database:
    return request.app.state.db
