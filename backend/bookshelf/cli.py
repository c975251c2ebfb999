"""
Bookshelf command line.

Usage:
    bookshelf serve --port 8000 --reload     # Run the API with uvicorn
    bookshelf init-db                        # Create database tables
    bookshelf create-user alice              # Add a login account (prompts for password)
"""
import argparse
import asyncio
import getpass
import sys
from typing import Optional


class Colors:
    """ANSI color codes for terminal output."""
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    END = '\033[0m'


def print_success(text: str):
    """Print success message."""
    print(f"{Colors.GREEN}✓ {text}{Colors.END}")


def print_error(text: str):
    """Print error message."""
    print(f"{Colors.RED}✗ {text}{Colors.END}", file=sys.stderr)


async def init_database() -> None:
    from bookshelf.database import close_db, init_db

    try:
        await init_db()
    finally:
        await close_db()


async def create_user(username: str, password: str) -> None:
    from bookshelf.database import AsyncSessionLocal, close_db, init_db
    from bookshelf.services.auth_service import AuthService

    try:
        await init_db()
        async with AsyncSessionLocal() as session:
            await AuthService(session).create_user(username, password)
            await session.commit()
    finally:
        await close_db()


def read_password(password: Optional[str]) -> str:
    """Use --password if given, otherwise prompt twice."""
    if password is None:
        password = getpass.getpass("Password: ")
        if getpass.getpass("Repeat password: ") != password:
            raise ValueError("Passwords do not match")
    if not password.strip():
        raise ValueError("Password must not be blank")
    return password


def main(argv: Optional[list[str]] = None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Bookshelf API management",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", default="0.0.0.0", help="Bind address (default: 0.0.0.0)")
    serve.add_argument("--port", type=int, default=8000, help="Port (default: 8000)")
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")

    subparsers.add_parser("init-db", help="Create database tables")

    user = subparsers.add_parser("create-user", help="Add a login account")
    user.add_argument("username", help="Login name")
    user.add_argument("--password", help="Password (prompted when omitted)")

    args = parser.parse_args(argv)

    try:
        if args.command == "serve":
            import uvicorn

            uvicorn.run("bookshelf.main:app", host=args.host, port=args.port, reload=args.reload)
        elif args.command == "init-db":
            asyncio.run(init_database())
            print_success("Database tables created")
        elif args.command == "create-user":
            password = read_password(args.password)
            asyncio.run(create_user(args.username, password))
            print_success(f"User '{args.username}' created")
    except KeyboardInterrupt:
        print(f"\n{Colors.YELLOW}Interrupted{Colors.END}")
        sys.exit(1)
    except ValueError as e:
        print_error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
