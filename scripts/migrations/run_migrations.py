#!/usr/bin/env python3
"""
Script: run_migrations.py
Purpose: Apply or revert the schema migrations in orders_service.migrations

Usage:
    python scripts/migrations/run_migrations.py [--dry-run]
    python scripts/migrations/run_migrations.py --rollback 1
    python scripts/migrations/run_migrations.py --status

Options:
    --dry-run       Show what would be done without making changes
    --rollback N    Revert the latest N applied migrations
    --status        List applied and pending migrations
"""

import sys
import argparse
from pathlib import Path
from datetime import datetime

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).parent.parent.parent

# Load environment before settings are read
env_path = ROOT_DIR / '.env.development'
if env_path.exists():
    load_dotenv(env_path)
else:
    load_dotenv(ROOT_DIR / '.env')

from orders_service.core.database import get_db_connection_dict_with_retry  # noqa: E402
from orders_service.migrations.runner import MigrationError, MigrationRunner  # noqa: E402


def print_header(title: str):
    """Print formatted header"""
    print(f"\n{'='*60}")
    print(f"  {title}")
    print(f"{'='*60}\n")


def print_status(runner: MigrationRunner):
    """Print applied and pending migrations"""
    runner.ensure_table()
    applied = runner.applied()
    pending = [migration.NAME for migration in runner.pending()]

    print(f"Applied ({len(applied)}):")
    for name in applied:
        print(f"  [x] {name}")
    print(f"Pending ({len(pending)}):")
    for name in pending:
        print(f"  [ ] {name}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Apply or revert schema migrations')
    parser.add_argument('--dry-run', action='store_true', help='Show what would be done without making changes')
    parser.add_argument('--rollback', type=int, metavar='N', help='Revert the latest N applied migrations')
    parser.add_argument('--status', action='store_true', help='List applied and pending migrations')
    args = parser.parse_args(argv)

    print_header("Schema migrations")
    print(f"Timestamp: {datetime.now().isoformat()}")
    print(f"Mode: {'DRY RUN' if args.dry_run else 'EXECUTE'}")

    try:
        conn = get_db_connection_dict_with_retry()
    except Exception as e:
        print(f"\nERROR: could not connect to database: {e}")
        return 1

    try:
        runner = MigrationRunner(conn)

        if args.status:
            print_status(runner)
            return 0

        if args.rollback is not None:
            names = runner.downgrade(steps=args.rollback, dry_run=args.dry_run)
            action = "Reverted"
        else:
            names = runner.upgrade(dry_run=args.dry_run)
            action = "Applied"

        if not names:
            print("\nNothing to do")
        for name in names:
            print(f"  {action}: {name}")
        return 0

    except MigrationError as e:
        print(f"\nERROR: {e}")
        return 1

    finally:
        conn.close()


if __name__ == '__main__':
    sys.exit(main())
