#!/usr/bin/env python3
"""
Initialize the template store database.

Creates the tables holding users' recurring document templates.
"""
import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

from config.settings import configure_logging
from data.database import DatabaseManager


logger = logging.getLogger(__name__)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Initialize the template store database'
    )
    parser.add_argument(
        '--database-url',
        type=str,
        default=None,
        help='Database URL (default: DATABASE_URL setting)'
    )
    parser.add_argument(
        '--drop-existing',
        action='store_true',
        help='Drop existing tables before creating new ones (WARNING: destroys data!)'
    )
    parser.add_argument(
        '--yes',
        action='store_true',
        help='Do not ask for confirmation before dropping tables'
    )

    args = parser.parse_args(argv)
    configure_logging()

    db_manager = DatabaseManager(args.database_url)
    logger.info("Initializing template store at %s", db_manager.database_url)

    if args.drop_existing:
        confirm = 'yes' if args.yes else input(
            "Drop existing tables? This will DELETE ALL TEMPLATES! (yes/no): "
        )
        if confirm.lower() != 'yes':
            logger.info("Aborted.")
            return 1
        db_manager.drop_tables()

    db_manager.create_tables()
    logger.info("Tables: %s", ", ".join(db_manager.table_names()))
    return 0


if __name__ == '__main__':
    sys.exit(main())
