"""
Alembic Migration Environment
===============================

What:  Runs the revisions in versions/ against DATABASE_URL from
       blackpeopleeats.config; alembic.ini carries no connection string.
How:   Online mode opens a NullPool async engine and hands its connection to
       Alembic through run_sync(). Offline mode renders SQL only.

SQLite cannot ALTER most constraints in place, so against SQLite every
operation is emitted in batch mode (copy table, move rows, rename).
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from blackpeopleeats import models  # noqa: F401
from blackpeopleeats.config import settings
from blackpeopleeats.database import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=Base.metadata,
        render_as_batch=settings.is_sqlite,
        compare_type=True,
        **kwargs,
    )


def run_migrations_offline() -> None:
    _configure(
        url=settings.database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _run_on_connection(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    engine = create_async_engine(settings.database_url, poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_run_on_connection)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
