# brandmate/core/db.py
"""
Database configuration and initialization module.
Handles Tortoise ORM setup, database connection, and migration configuration.
"""
from tortoise import Tortoise, connections

from brandmate.config import settings

DB_URL = settings.database_url

# Tortoise ORM configuration dictionary
# This configuration is also used by Aerich for database migrations
TORTOISE_ORM = {
    "connections": {"default": DB_URL},
    "apps": {
        "models": {
            "models": [
                "brandmate.models.user",   # User model
                "brandmate.models.name",   # Name record model
                "aerich.models",           # Required: Let Aerich manage migration tables
            ],
            "default_connection": "default",
        },
    },
}

async def init_db(generate_schemas: bool = False):
    """
    Initialize Tortoise ORM database connection.

    Args:
        generate_schemas: Create missing tables (local sqlite / tests).
            Production schemas are managed with Aerich migrations.
    """
    await Tortoise.init(config=TORTOISE_ORM)
    if generate_schemas:
        await Tortoise.generate_schemas(safe=True)

async def close_db():
    """Close all database connections on shutdown."""
    await Tortoise.close_connections()

async def ping_db() -> str:
    """
    Run a trivial query on the default connection.

    Returns:
        Name of the connected database (engine-dependent, best effort)

    Raises:
        Any driver error if the database is unreachable
    """
    conn = connections.get("default")
    await conn.execute_query("SELECT 1")
    return getattr(conn, "database", None) or getattr(conn, "filename", None) or "default"
