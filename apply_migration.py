#!/usr/bin/env python3
"""
Print the drift engine schema migrations for manual application.
"""

import sys
from pathlib import Path

MIGRATIONS_DIR = Path(__file__).parent / "database" / "migrations"


def apply_migration() -> bool:
    """Print every migration in order with Supabase SQL Editor instructions."""
    migrations = sorted(MIGRATIONS_DIR.glob("*.sql"))
    if not migrations:
        print(f"No migration files found in {MIGRATIONS_DIR}")
        return False

    for path in migrations:
        print(f"-- {path.name}")
        print("=" * 60)
        print(path.read_text(encoding="utf-8"))
        print("=" * 60)

    print("\nMANUAL ACTION REQUIRED:")
    print("Copy the SQL above and run it in your Supabase SQL Editor:")
    print("1. Go to https://supabase.com/dashboard/project/[your-project]/sql")
    print("2. Paste the SQL above")
    print("3. Click 'Run'")
    print("\nThen verify the connection with:")
    print("python run.py health database")

    return True


if __name__ == "__main__":
    sys.exit(0 if apply_migration() else 1)
