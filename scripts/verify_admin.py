"""Check that an account exists in Supabase and holds the expected role."""
from __future__ import annotations

import argparse

from application.use_cases.verify_account import AccountNotFoundError, verify_account
from infrastructure.config import ConfigurationError, ContainerConfig, create_supabase_client
from infrastructure.repositories.supabase_repositories import SupabaseAccountDirectory
from ui.logging_utils import setup_logging


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("email", help="Email address of the account")
    parser.add_argument("--role", default="admin", help="Role the account must hold (default: admin)")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    config = ContainerConfig.from_env()
    setup_logging(config.log_level, config.log_file)

    try:
        directory = SupabaseAccountDirectory(create_supabase_client(config))
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}")
        return 2

    try:
        report = verify_account(args.email, directory=directory, required_role=args.role)
    except AccountNotFoundError as exc:
        print(exc)
        return 1

    account = report.account
    print("=== Account ===")
    print(f"email: {account.email}")
    print(f"name: {account.name or '-'}")
    print(f"organization: {account.organization or '-'}")
    print(f"email verified: {'yes' if account.email_verified else 'no'}")
    if account.created_at:
        print(f"created: {account.created_at.isoformat()}")

    print("\n=== Roles ===")
    if not report.roles:
        print("no roles assigned")
    for role in report.roles:
        print(f"  - {role.name}: {role.description or ''}")

    if not report.has_required_role:
        print(f"\nAccount does not hold the '{args.role}' role.")
        return 1

    print("\n=== Permissions ===")
    for permission in report.permissions:
        print(f"  - {permission}")
    print(f"\nAccount holds the '{args.role}' role.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
