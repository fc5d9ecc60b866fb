#!/usr/bin/env python3
"""
Maintain the Mithril Cars SQLite database.

Sub-commands:
    init    create the tables (applies pending migrations; safe to repeat)
    seed    insert a few sample manufacturers and cars
    reset   drop every table and re-create an empty schema

Usage:
    python manage_db.py init
    python manage_db.py --db ./cars.sqlite3 seed
    python manage_db.py --db /tmp/cars.sqlite3 reset --yes

Without ``--db`` the path configured by ``DATABASE_URL`` is used.
"""

import argparse
import sys
from contextlib import closing
from typing import Optional, Sequence

from mithril_cars_api.app.core import db
from mithril_cars_api.app.core.errors import StoreError

SAMPLE_DATA = {
    "Ford": [("Mustang", "1965"), ("Model T", "1908")],
    "Volkswagen": [("Beetle", "1938"), ("Golf", "1974")],
    "Citroen": [("2CV", "1948")],
}


def seed(path: Optional[str] = None) -> int:
    """Insert ``SAMPLE_DATA`` and return the number of cars created."""
    created = 0
    with closing(db.get_connection(path)) as conn:
        for name, models in SAMPLE_DATA.items():
            manufacturer_id = db.insert_from_object(conn, "manufacturers", {"name": name})
            for model_name, model_year in models:
                db.insert_from_object(
                    conn,
                    "cars",
                    {
                        "manufacturer_id": manufacturer_id,
                        "model_name": model_name,
                        "model_year": model_year,
                    },
                )
                created += 1
    return created


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Manage the Mithril Cars database (SQLite).")
    ap.add_argument("--db", help="Path to SQLite DB file (defaults to DATABASE_URL)")
    commands = ap.add_subparsers(dest="command", required=True)
    commands.add_parser("init", help="Create tables and apply pending migrations")
    commands.add_parser("seed", help="Insert sample manufacturers and cars")
    reset = commands.add_parser("reset", help="Drop all tables and re-create the schema")
    reset.add_argument("--yes", action="store_true", help="Do not ask for confirmation")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    path = args.db or db.get_database_path()

    try:
        if args.command == "init":
            version = db.init_db(path)
            print(f"[+] Schema at version {version}: {path}")
        elif args.command == "seed":
            db.init_db(path)
            count = seed(path)
            print(f"[+] Inserted {len(SAMPLE_DATA)} manufacturers and {count} cars into {path}")
        elif args.command == "reset":
            if not args.yes:
                answer = input(f"Drop all data in {path}? [y/N] ")
                if answer.strip().lower() not in {"y", "yes"}:
                    print("[!] Aborted.", file=sys.stderr)
                    return 1
            version = db.reset_db(path)
            print(f"[+] Database reset (schema version {version}): {path}")
    except StoreError as exc:
        print(f"[!] {exc.text}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
