"""Storefront management CLI.

Schema management for the storefront database plus bootstrapping of the
first administrator, who cannot be created through the public API.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py create-admin --email ada@example.com --first-name Ada --last-name Admin
"""

import argparse
import sys


def _initialized_domain():
    import storefront.elements  # noqa: F401
    from storefront.domain import storefront

    print("Initializing storefront domain...")
    storefront.init()
    return storefront


def setup_database():
    """Create the storefront database schema."""
    from storefront.utils.db import setup_db

    storefront = _initialized_domain()
    print("Creating storefront database schema...")
    setup_db(storefront)
    print("Done.")


def drop_database():
    """Drop the storefront database schema."""
    from storefront.utils.db import drop_db

    storefront = _initialized_domain()
    print("Dropping storefront database schema...")
    drop_db(storefront)
    print("Done.")


def create_admin(email, first_name, last_name):
    """Create an administrator and print its id, used as the X-User-Id header."""
    from storefront.identity.user.registration import CreateAdminUser

    storefront = _initialized_domain()
    with storefront.domain_context():
        user_id = storefront.process(
            CreateAdminUser(email=email, first_name=first_name, last_name=last_name),
            asynchronous=False,
        )
    print(f"Administrator {email} created: {user_id}")


def main():
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    admin_parser = subparsers.add_parser("create-admin", help="Create an administrator account")
    admin_parser.add_argument("--email", required=True)
    admin_parser.add_argument("--first-name", required=True)
    admin_parser.add_argument("--last-name", required=True)

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "create-admin":
        create_admin(args.email, args.first_name, args.last_name)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
