"""CLI for the health check-up service: create tables and bootstrap admins."""

from __future__ import annotations

import argparse
import asyncio
import getpass
import sys


async def cmd_init_db(args):
    """Create the submissions and auth tables."""
    from checkup.main import create_all

    await create_all()
    print("Tables created.")


async def cmd_create_admin(args):
    """Create an administrator account."""
    from checkup.config import get_settings
    from checkup.db.auth_engine import auth_session_factory
    from checkup.errors import CheckupError
    from checkup.main import create_all
    from checkup.services.directory import UserDirectory

    await create_all()

    # Get password interactively if not provided
    password = args.password
    if not password:
        password = getpass.getpass("Admin password: ")
        confirm = getpass.getpass("Confirm password: ")
        if password != confirm:
            print("Passwords do not match")
            sys.exit(1)

    if len(password) < 8:
        print("Password must be at least 8 characters")
        sys.exit(1)

    async with auth_session_factory() as db:
        directory = UserDirectory(db, get_settings().auth.login_domain)
        try:
            user = await directory.create(args.username, password, "admin", args.branch or None)
        except CheckupError as e:
            print(e.message)
            sys.exit(1)

    print(f"Admin user: {user.username} (id={user.id}, login={user.email})")


def main():
    parser = argparse.ArgumentParser(description="Office health check-up CLI")
    subparsers = parser.add_subparsers(dest="command")

    # init-db
    subparsers.add_parser("init-db", help="Create database tables")

    # create-admin
    ca = subparsers.add_parser("create-admin", help="Create an administrator account")
    ca.add_argument("--username", required=True, help="Admin username")
    ca.add_argument("--password", default="", help="Admin password (prompted if not given)")
    ca.add_argument("--branch", default="", help="Assigned branch")

    args = parser.parse_args()
    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "init-db":
        asyncio.run(cmd_init_db(args))
    elif args.command == "create-admin":
        asyncio.run(cmd_create_admin(args))


if __name__ == "__main__":
    main()
