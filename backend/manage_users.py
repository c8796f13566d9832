#!/usr/bin/env python3
"""
User maintenance commands.

Usage:
    python manage_users.py verify owner@example.com
    python manage_users.py create-super-admin admin@example.com "Platform Admin"
"""

import argparse
import getpass
import sys

from rich.console import Console

from api.dependencies import ServiceContainer
from modules.auth.repository import UserRepository
from modules.auth.validation import email_errors, normalize_email, password_errors
from shared.models import AccountStatus, KycStatus, UserRole

console = Console()


def verify_user(users: UserRepository, email: str) -> int:
    """Mark an account's email as verified without a code."""
    user = users.get_by_email(normalize_email(email))
    if user is None:
        console.print(f"[red]User not found:[/red] {email}")
        return 1

    console.print(f"Found {user.email} (verified: {user.is_verified})")
    if user.is_verified:
        console.print("[yellow]Already verified, nothing to do[/yellow]")
        return 0

    users.update(
        user.id,
        {"is_verified": True, "verification_code": None, "verification_expires": None},
    )
    console.print("[green]User verified, they can now log in[/green]")
    return 0


def create_super_admin(container: ServiceContainer, email: str, name: str) -> int:
    users = container.user_repository
    email = normalize_email(email)

    errors = email_errors(email)
    if not name.strip():
        errors.append("Name is required")
    if errors:
        for error in errors:
            console.print(f"[red]{error}[/red]")
        return 1
    if users.email_exists(email):
        console.print(f"[red]A user with email {email} already exists[/red]")
        return 1

    password = getpass.getpass("Password: ")
    problems = password_errors(password)
    if problems:
        for problem in problems:
            console.print(f"[red]{problem}[/red]")
        return 1
    if getpass.getpass("Confirm password: ") != password:
        console.print("[red]Passwords do not match[/red]")
        return 1

    user = users.create(
        {
            "name": name.strip(),
            "email": email,
            "password_hash": container.hasher.hash(password),
            "role": UserRole.SUPER_ADMIN.value,
            "is_verified": True,
            "account_status": AccountStatus.ACTIVE.value,
            "kyc_status": KycStatus.APPROVED.value,
        }
    )
    console.print(f"[green]Created super admin[/green] {user.email} ({user.id})")
    return 0


def main():
    parser = argparse.ArgumentParser(description="Klarity user maintenance")
    commands = parser.add_subparsers(dest="command", required=True)

    verify = commands.add_parser("verify", help="Manually verify a user's email")
    verify.add_argument("email")

    admin = commands.add_parser("create-super-admin", help="Create a platform super admin")
    admin.add_argument("email")
    admin.add_argument("name")

    args = parser.parse_args()
    container = ServiceContainer()

    if args.command == "verify":
        sys.exit(verify_user(container.user_repository, args.email))
    sys.exit(create_super_admin(container, args.email, args.name))


if __name__ == "__main__":
    main()
