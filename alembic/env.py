"""
Alembic environment.

Imports the projectboard models so ``Base.metadata`` covers every table, and
runs migrations through the same async engine settings the app uses.
"""

from logging.config import fileConfig
from sqlalchemy.engine import Connection
from alembic import context
import asyncio

from projectboard.config import settings
from projectboard.db.base import Base
from projectboard.db.session import Database
import projectboard.models  # noqa: F401 (registers models with metadata)

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    context.configure(
        url=settings.database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    database = Database(settings.database_url)
    database.open()

    async with database.engine.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await database.dispose()


def run_migrations_online() -> None:
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
