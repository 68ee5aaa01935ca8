"""Round-trip the Jobly migrations against DATABASE_URL.

Downgrades to an empty schema, upgrades back to head, confirms the four Jobly
tables exist, then checks the table models for drift. Destroys all data:
point it at a scratch database.

Usage: DATABASE_URL=postgresql+psycopg://... python scripts/check_migrations.py
"""

import sys

from dotenv import load_dotenv

load_dotenv()

from alembic import command  # noqa: E402
from alembic.config import Config  # noqa: E402
from alembic.util import CommandError  # noqa: E402
from sqlalchemy import inspect  # noqa: E402

from jobly.db import tables  # noqa: E402,F401
from jobly.db.base import Base, get_engine  # noqa: E402

JOBLY_TABLES = set(Base.metadata.tables)


def existing_tables() -> set[str]:
    return set(inspect(get_engine()).get_table_names()) & JOBLY_TABLES


def main() -> int:
    cfg = Config("alembic.ini")

    command.downgrade(cfg, "base")
    left = existing_tables()
    if left:
        print(f"Downgrade left tables behind: {sorted(left)}")
        return 1
    print("Downgraded to base")

    command.upgrade(cfg, "head")
    missing = JOBLY_TABLES - existing_tables()
    if missing:
        print(f"Upgrade did not create: {sorted(missing)}")
        return 1
    print(f"Upgraded to head: {sorted(JOBLY_TABLES)}")

    try:
        command.check(cfg)
    except CommandError as e:
        print(f"Models and migrations disagree: {e}")
        return 1
    print("No schema drift detected")
    return 0


if __name__ == "__main__":
    sys.exit(main())
