"""Upgrade DATABASE_URL to the latest Merraine schema and verify it.

Fails when a table is missing after `upgrade head` or when the ORM models
have drifted from the migrations.

Usage: python scripts/check_migrations.py
"""

import sys

from dotenv import load_dotenv

load_dotenv()

from alembic import command  # noqa: E402
from alembic.config import Config  # noqa: E402
from sqlalchemy import inspect  # noqa: E402

from merraine.db.base import get_engine  # noqa: E402

EXPECTED_TABLES = {
    "searches",
    "candidates",
    "search_candidates",
    "saved_candidates",
    "app_settings",
    "credit_transactions",
}


def main() -> int:
    alembic_cfg = Config("alembic.ini")

    print("Merraine schema check")
    print("=" * 40)
    command.upgrade(alembic_cfg, "head")
    command.current(alembic_cfg, verbose=False)

    present = set(inspect(get_engine()).get_table_names())
    missing = EXPECTED_TABLES - present
    if missing:
        print(f"Missing tables after upgrade: {', '.join(sorted(missing))}")
        return 1
    print(f"All {len(EXPECTED_TABLES)} tables present")

    # Raises when the models declare something the migrations do not create
    command.check(alembic_cfg)
    print("Models match migrations")
    return 0


if __name__ == "__main__":
    sys.exit(main())
