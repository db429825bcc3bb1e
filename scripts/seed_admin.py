"""
Seed Admin User

Creates an ADMIN (or REVIEWER) account for InnoHub. Safe to re-run: an
existing account with the same email is left untouched.

Usage:
    SEED_ADMIN_EMAIL=admin@example.com SEED_ADMIN_PASSWORD=... python scripts/seed_admin.py
    python scripts/seed_admin.py --email reviewer@example.com --password ... --role REVIEWER
"""

import argparse
import asyncio
import os
import sys
from pathlib import Path

# Add the src directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from innohub.core.database import async_session_maker, close_db
from innohub.core.security import hash_password
from innohub.modules.users.models import UserRole
from innohub.modules.users.repository import UserRepository


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create an InnoHub admin or reviewer account.")
    parser.add_argument("--email", default=os.environ.get("SEED_ADMIN_EMAIL"))
    parser.add_argument("--password", default=os.environ.get("SEED_ADMIN_PASSWORD"))
    parser.add_argument("--name", default=os.environ.get("SEED_ADMIN_NAME", "Administrator"))
    parser.add_argument(
        "--role",
        choices=[UserRole.ADMIN.value, UserRole.REVIEWER.value],
        default=UserRole.ADMIN.value,
    )
    args = parser.parse_args()

    if not args.email or not args.password:
        parser.error("--email and --password (or SEED_ADMIN_EMAIL / SEED_ADMIN_PASSWORD) are required")
    return args


async def seed_admin(email: str, password: str, name: str, role: UserRole) -> None:
    """Create the account if it doesn't exist."""
    email = email.lower()

    async with async_session_maker() as db:
        existing_user = await UserRepository.get_by_email(db, email)

        if existing_user:
            print(f"User already exists: {email}")
            print(f"  ID: {existing_user.id}")
            print(f"  Role: {existing_user.role.value}")
            return

        user = await UserRepository.create(
            db,
            email=email,
            password_hash=hash_password(password),
            role=role,
            name=name,
        )

        print(f"{role.value} created successfully!")
        print(f"  Email: {user.email}")
        print(f"  ID: {user.id}")


async def main(args: argparse.Namespace) -> None:
    try:
        await seed_admin(args.email, args.password, args.name, UserRole(args.role))
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(main(parse_args()))
