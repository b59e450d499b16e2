"""Savourly management CLI.

Usage:
    python src/manage.py seed-plans         # Insert the default plans into an empty catalogue
    python src/manage.py init-credentials   # Create the credentials file with the seed accounts
    python src/manage.py show-credentials   # Print the admin and delivery allow-lists
"""

import argparse
import json
import sys


def seed_plans():
    """Seed the plan catalogue through the configured catalogue providers."""
    from catalogue.domain import catalogue
    from catalogue.plan.seeding import SeedDefaultPlans

    print("Initializing catalogue domain...")
    catalogue.init()
    with catalogue.domain_context():
        seeded = catalogue.process(SeedDefaultPlans(), asynchronous=False)

    if seeded:
        print(f"  Seeded {seeded} plans.")
    else:
        print("  Catalogue already has plans; nothing to do.")
    print("Done.")


def init_credentials():
    from access.credentials import get_credential_store

    store = get_credential_store()
    credentials = store.load()
    print(f"Credentials file: {store.path}")
    print(f"  {len(credentials['admins'])} admin(s), {len(credentials['delivery'])} delivery partner(s).")
    print("Done.")


def show_credentials():
    from access.credentials import get_credential_store

    print(json.dumps(get_credential_store().load(), indent=2))


def main():
    parser = argparse.ArgumentParser(description="Savourly management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("seed-plans", help="Insert the default plans when the catalogue is empty")
    subparsers.add_parser("init-credentials", help="Create the credentials file if it is missing")
    subparsers.add_parser("show-credentials", help="Print the admin and delivery allow-lists")

    args = parser.parse_args()

    if args.command == "seed-plans":
        seed_plans()
    elif args.command == "init-credentials":
        init_credentials()
    elif args.command == "show-credentials":
        show_credentials()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
