"""Marketplace management CLI.

Usage:
    python src/manage.py setup-db              # Create all tables
    python src/manage.py drop-db               # Drop all tables
    python src/manage.py restock --quantity 100
    python src/manage.py token <user-id> --role seller
"""

import argparse
import sys


def _init_domain():
    from marketplace.domain import marketplace

    marketplace.init()
    return marketplace


def setup_database():
    from marketplace.utils.db import setup_db

    domain = _init_domain()
    print("Creating marketplace database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from marketplace.utils.db import drop_db

    domain = _init_domain()
    print("Dropping marketplace database schema...")
    drop_db(domain)
    print("Done.")


def restock_products(quantity):
    """Reset every product's stock to ``quantity`` and put it back on sale."""
    from marketplace.catalogue.product import Product
    from marketplace.utils.pagination import fetch_all

    domain = _init_domain()
    with domain.domain_context():
        repo = domain.repository_for(Product)
        products = fetch_all(repo._dao.query.order_by("id"))
        for product in products:
            product.restock(quantity)
            repo.add(product)
    print(f"Restocked {len(products)} products to {quantity} units.")


def issue_token(user_id, role):
    from marketplace.api.auth import create_access_token

    print(create_access_token(user_id, role))


def main():
    parser = argparse.ArgumentParser(description="Marketplace management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    restock_parser = subparsers.add_parser("restock", help="Reset stock on every product")
    restock_parser.add_argument("--quantity", type=int, default=100)

    token_parser = subparsers.add_parser("token", help="Issue a development access token")
    token_parser.add_argument("user_id")
    token_parser.add_argument("--role", choices=["buyer", "seller", "admin"], default="buyer")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "restock":
        restock_products(args.quantity)
    elif args.command == "token":
        issue_token(args.user_id, args.role)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
