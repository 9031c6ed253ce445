"""Create (or reset) the board tables on the configured database.

Alembic migrations are the normal path; this is for local SQLite setups and
throwaway databases.
"""
from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from ama_board.core.settings import settings
from ama_board.db.session import create_tables, drop_tables

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Create the AMA board tables")
    parser.add_argument(
        "--drop-tables",
        action="store_true",
        help="Drop every board table before creating them again.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level.upper())
    if args.drop_tables:
        drop_tables()
        logger.warning("Dropped all board tables")
    create_tables()
    logger.info("Board tables ready on %s", settings.effective_database_url.split("://", 1)[0])


if __name__ == "__main__":
    main()
