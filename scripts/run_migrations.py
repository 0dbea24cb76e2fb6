#!/usr/bin/env python3
"""Bring the inventory database schema up to date.

Waits for the database to accept connections, then runs Alembic to ``head``.
Intended to run once before the service starts handling requests.
"""
import logging
import sys
import time
from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.script import ScriptDirectory
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from rental_inventory.core.config import get_settings
from rental_inventory.core.db import create_db_engine
from rental_inventory.core.logging import configure_logging

logger = logging.getLogger(__name__)

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def wait_for_db(database_url: str, max_retries: int = 30, retry_interval: int = 2) -> bool:
    """Poll the database until ``SELECT 1`` succeeds.

    Args:
        database_url: SQLAlchemy database URL
        max_retries: Maximum number of connection attempts
        retry_interval: Seconds to wait between retries

    Returns:
        True if the database answered, False once retries are exhausted
    """
    engine = create_db_engine(database_url)
    try:
        for attempt in range(1, max_retries + 1):
            try:
                with engine.connect() as conn:
                    conn.execute(text("SELECT 1"))
                logger.info("Database connection established")
                return True
            except OperationalError as e:
                if attempt == max_retries:
                    logger.error(f"Database unreachable after {max_retries} attempts: {e}")
                    return False
                logger.warning(f"Attempt {attempt}/{max_retries} failed, retrying in {retry_interval}s")
                time.sleep(retry_interval)
    finally:
        engine.dispose()
    return False


def run_migrations(database_url: str) -> bool:
    """Upgrade the schema to the latest revision."""
    if not ALEMBIC_INI.exists():
        logger.error(f"Alembic config not found at {ALEMBIC_INI}")
        return False

    alembic_cfg = Config(str(ALEMBIC_INI))
    alembic_cfg.set_main_option("sqlalchemy.url", database_url)

    script = ScriptDirectory.from_config(alembic_cfg)
    for rev in script.walk_revisions():
        logger.info("Known revision %s: %s", rev.revision, rev.doc)

    try:
        command.upgrade(alembic_cfg, "head")
    except Exception:
        logger.exception("Migration failed")
        return False

    logger.info("Migrations completed")
    return True


def main() -> int:
    settings = get_settings()
    configure_logging(settings)

    if not wait_for_db(settings.database_url):
        return 1
    if not run_migrations(settings.database_url):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
