"""
Name: Record Table Schema Script

Responsibilities:
  - Create the app_records table and its indexes (idempotent)
  - Print the DDL without executing it (--dry-run)
"""

from __future__ import annotations

import argparse
import os
import sys

import psycopg

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from staffing.infrastructure.db.schema import SCHEMA_STEPS, apply_schema  # noqa: E402


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create the app_records table and indexes (idempotent)."
    )
    parser.add_argument(
        "--database-url",
        default=os.getenv("DATABASE_URL", ""),
        help="Postgres connection string (default: $DATABASE_URL)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the schema steps instead of executing them",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    if args.dry_run:
        for name, sql in SCHEMA_STEPS:
            print(f"-- {name}")
            print(sql.strip() + ";")
        return 0

    if not args.database_url:
        raise SystemExit("DATABASE_URL is required to initialize the schema.")

    with psycopg.connect(args.database_url) as conn:
        apply_schema(conn)
    print(f"Schema ready: {len(SCHEMA_STEPS)} steps applied.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
