"""Create (or reset) an admin account.

Usage: python scripts/create_admin.py --email admin@example.com --name Admin
The password is read from ADMIN_PASSWORD or prompted for.
"""
from __future__ import annotations

import argparse
import getpass
import os

from dotenv import load_dotenv

from salary_system.config import load_settings
from salary_system.database.bootstrap import ensure_admin_user


def main() -> None:
    load_dotenv(override=False)

    parser = argparse.ArgumentParser(description="Create or reset an admin user")
    parser.add_argument("--email", required=True)
    parser.add_argument("--name", default="Administrator")
    args = parser.parse_args()

    password = os.getenv("ADMIN_PASSWORD") or getpass.getpass("Admin password: ")
    if len(password) < 8:
        raise SystemExit("Password must be at least 8 characters")

    settings = load_settings()
    user_id = ensure_admin_user(
        settings.db_config,
        name=args.name,
        email=args.email,
        password=password,
        password_hash_method=settings.password_hash_method,
    )
    print(f"OK: admin {args.email} ready (id={user_id})")


if __name__ == "__main__":
    main()
