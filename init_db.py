"""
Database initialization script.
Creates the users and posts tables, or applies Alembic migrations with --migrate.
Run this as: python init_db.py [--migrate]
"""

import argparse
import logging
import sys

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("db-init")

from app.db.init_db import create_all_tables, run_migrations
from app.db.session import engine

def main() -> int:
    parser = argparse.ArgumentParser(description="Initialize the database")
    parser.add_argument("--migrate", action="store_true", help="Apply Alembic migrations instead of create_all")
    parser.add_argument("--revision", default="head", help="Revision to migrate to (default: head)")
    args = parser.parse_args()

    logger.info(f"Initializing database at: {engine.url.render_as_string(hide_password=True)}")

    try:
        if args.migrate:
            run_migrations(args.revision)
        else:
            create_all_tables()
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        return 1

    logger.info("Database initialization completed successfully")
    return 0

if __name__ == "__main__":
    sys.exit(main())
