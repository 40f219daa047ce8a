"""Alembic environment — runs devlink migrations through the async driver.

The database URL comes from devlink.config.Settings (DATABASE_URL), so the
postgresql:// -> postgresql+asyncpg:// rewrite happens in one place. alembic.ini
only supplies logging configuration and a local fallback URL.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from alembic import context

from devlink.config import get_settings
from devlink.db.base import Base
import devlink.models  # noqa: F401  (registers users, profiles, posts)

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _database_url() -> str:
    return get_settings().database_url or config.get_main_option("sqlalchemy.url")


def _configure_and_run(**options) -> None:
    context.configure(
        target_metadata=target_metadata, compare_type=True, **options,
    )
    with context.begin_transaction():
        context.run_migrations()


def _run_sync(connection: Connection) -> None:
    _configure_and_run(connection=connection)


async def _run_online() -> None:
    engine = create_async_engine(_database_url(), poolclass=pool.NullPool)
    async with engine.connect() as connection:
        await connection.run_sync(_run_sync)
    await engine.dispose()


if context.is_offline_mode():
    _configure_and_run(
        url=_database_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
else:
    asyncio.run(_run_online())
