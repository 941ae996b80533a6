"""Reusable migration runner for deployment scripts and tests."""

import asyncio
from concurrent.futures import ThreadPoolExecutor

from alembic.config import Config

from alembic import command


def run_migrations_sync(config_path: str = "alembic.ini") -> None:
    """Upgrade the configured database to the latest revision."""
    command.upgrade(Config(config_path), "head")


async def run_migrations_async(config_path: str = "alembic.ini") -> None:
    """Run Alembic migrations from async context.

    Uses ThreadPoolExecutor to avoid event loop conflicts with Alembic.
    """
    loop = asyncio.get_running_loop()
    with ThreadPoolExecutor() as pool:
        await loop.run_in_executor(pool, run_migrations_sync, config_path)
