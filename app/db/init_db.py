"""
Schema bootstrap for the users and posts tables.

create_all_tables is what the app runs at startup; run_migrations applies the
Alembic history instead and is what deployed databases should use.
"""

import logging
from pathlib import Path
from typing import Set

from alembic import command
from alembic.config import Config
from sqlalchemy import inspect

from app.db.base import Base
from app.db.session import engine

logger = logging.getLogger("app.db")

ALEMBIC_INI = Path(__file__).resolve().parents[2] / "alembic.ini"


def run_migrations(revision: str = "head") -> None:
    alembic_cfg = Config(str(ALEMBIC_INI))
    alembic_cfg.set_main_option("script_location", str(ALEMBIC_INI.parent / "alembic"))
    command.upgrade(alembic_cfg, revision)
    logger.info(f"Database migrated to {revision}")


def create_all_tables() -> Set[str]:
    """Create missing tables, returning the names of the ones created."""
    existing = set(inspect(engine).get_table_names())
    Base.metadata.create_all(bind=engine)

    created = set(inspect(engine).get_table_names()) - existing
    if created:
        logger.info(f"Created tables: {sorted(created)}")
    else:
        logger.debug("All tables already present")
    return created
