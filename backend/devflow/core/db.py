# devflow/core/db.py
"""
Database configuration and lifecycle module.
Handles Tortoise ORM setup, the store handle shared by the services,
and the migration configuration used by Aerich.
"""
import asyncio
import logging
from tortoise import Tortoise

from devflow.config import settings

logger = logging.getLogger("uvicorn.error")

# Modules holding the Tortoise models of this application
MODEL_MODULES = [
    "devflow.models.user",          # User model
    "devflow.models.tag",           # Tag model
    "devflow.models.question",      # Question model (tags / votes relations)
    "devflow.models.answer",        # Answer model (belongs to Question)
    "devflow.models.interaction",   # Interaction model (user activity log)
]

def build_tortoise_config(db_url: str) -> dict:
    """
    Build a Tortoise ORM configuration dictionary for the given connection URL.

    Args:
        db_url: Connection URL (e.g. "postgres://user:pw@host:5432/db", "sqlite://:memory:")

    Returns:
        dict: Configuration accepted by Tortoise.init and Aerich
    """
    return {
        "connections": {"default": db_url},
        "apps": {
            "models": {
                "models": [
                    *MODEL_MODULES,
                    "aerich.models",  # Required: Let Aerich manage migration tables
                ],
                "default_connection": "default",
            },
        },
    }

# Tortoise ORM configuration dictionary
# This configuration is also used by Aerich for database migrations
TORTOISE_ORM = build_tortoise_config(settings.database_url)


class Database:
    """
    Store handle with an explicit lifecycle.

    One instance is created at process start, handed to the services that
    need it, and closed at shutdown. `connect()` may be called before every
    operation: only the first call opens the connection, and concurrent
    first calls wait on a lock instead of initializing twice.

    Tortoise keeps its connections and model registry in process-global
    state, so only one open handle per process is supported. Opening a
    second handle re-initializes Tortoise for both, and closing either one
    closes the connections of both.
    """

    def __init__(self, db_url: str, generate_schemas: bool = False):
        self.db_url = db_url
        self.generate_schemas = generate_schemas
        self._connected = False
        self._lock = asyncio.Lock()

    async def connect(self) -> None:
        """Open the connection and register all models. No-op when already open."""
        if self._connected:
            return
        async with self._lock:
            if self._connected:
                return
            await Tortoise.init(config=build_tortoise_config(self.db_url))
            if self.generate_schemas:
                # Don't rely on this in production; use Aerich migrations for schema management instead
                await Tortoise.generate_schemas(safe=True)
            self._connected = True
        logger.info("[db] connected (schemas generated: %s)", self.generate_schemas)

    async def close(self) -> None:
        """Close all database connections. Safe to call when not connected."""
        if not self._connected:
            return
        await Tortoise.close_connections()
        self._connected = False
        logger.info("[db] connection closed")


async def init_db(db_url: str | None = None) -> Database:
    """
    Create and connect the application's store handle.

    Called during application startup.
    """
    database = Database(db_url or settings.database_url, generate_schemas=settings.generate_schemas)
    await database.connect()
    return database

async def close_db(database: Database) -> None:
    """Close the store handle during application shutdown."""
    await database.close()
