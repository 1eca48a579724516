"""Create or reset the tables of the configured database."""
from __future__ import annotations

import argparse

from plume.core.settings import settings
from plume.db.session import create_tables, drop_tables


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Create the Plume tables")
    parser.add_argument(
        "--drop-tables",
        action="store_true",
        help="Drop every table before creating them again.",
    )
    args = parser.parse_args(argv)

    if args.drop_tables:
        drop_tables()
        print("[init_db] dropped all tables")
    create_tables()
    print(f"[init_db] tables ready on {settings.effective_database_url}")


if __name__ == "__main__":
    main()
