"""Shopping service management CLI.

Usage:
    python src/manage.py setup-db                         # Create all tables
    python src/manage.py drop-db                          # Drop all tables
    python src/manage.py open-account alice --balance 100 # Seed a user
"""

import argparse
import sys


def _domain():
    from shopping.domain import shopping

    shopping.init()
    return shopping


def setup_database():
    from shopping.utils.db import setup_db

    domain = _domain()
    print("Creating shopping database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from shopping.utils.db import drop_db

    domain = _domain()
    print("Dropping shopping database schema...")
    drop_db(domain)
    print("Done.")


def open_account(name, balance):
    from shopping.account.opening import OpenAccount
    from shopping.errors import ShoppingError

    domain = _domain()
    with domain.domain_context():
        try:
            account_id = domain.process(OpenAccount(name=name, balance=balance), asynchronous=False)
        except ShoppingError as exc:
            print(f"Error: {exc.message}", file=sys.stderr)
            sys.exit(1)
    print(f"Opened account {name!r} ({account_id}) with balance {balance}")


def main():
    parser = argparse.ArgumentParser(description="Shopping service management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    account_parser = subparsers.add_parser("open-account", help="Open a user account")
    account_parser.add_argument("name", help="External user identity (the X-User-Id value)")
    account_parser.add_argument("--balance", type=float, default=0.0, help="Initial prepaid balance")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "open-account":
        open_account(args.name, args.balance)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
