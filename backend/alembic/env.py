"""Alembic environment for Fic.AI Signals (async engine).

FICAI_DATABASE_URL wins over sqlalchemy.url in alembic.ini, and goes through
the same postgresql:// rewrite as the application settings.
"""

import asyncio
import os
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from ficai_signals.config import normalize_database_url
from ficai_signals.db.base import Base
import ficai_signals.models  # noqa: F401  (registers every table on Base.metadata)

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

env_url = os.environ.get("FICAI_DATABASE_URL")
if env_url:
    # configparser interpolation: escape % in passwords
    config.set_main_option(
        "sqlalchemy.url", normalize_database_url(env_url).replace("%", "%%"),
    )


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata, compare_type=True, **kwargs,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_offline() -> None:
    """Emit SQL to stdout instead of connecting."""
    _configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )


async def run_migrations_online() -> None:
    engine = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    async with engine.connect() as connection:
        await connection.run_sync(
            lambda sync_conn: _configure(connection=sync_conn),
        )
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
