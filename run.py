"""
Command-line entry point for a storefront session.

Examples:
    python run.py catalog
    python run.py search "tênis"
    python run.py --session alice add 1 2
    python run.py --session alice cart
    python run.py --session alice favorite 5

Cart and favorites survive between invocations only with STORAGE_BACKEND=redis.
"""

import argparse
import asyncio
import logging
import sys

import config
from exceptions import StorefrontException
from storefront import Storefront, create_storefront
from utils.config_validator import validate_or_exit
from utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Storefront session CLI")
    parser.add_argument("--session", default="cli", help="Session id (default: cli)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("catalog", help="Show catalog summary")

    search = subparsers.add_parser("search", help="Search products")
    search.add_argument("query")

    add = subparsers.add_parser("add", help="Add a product to the cart")
    add.add_argument("product_id", type=int)
    add.add_argument("quantity", type=int, nargs="?", default=1)

    subparsers.add_parser("cart", help="Show the cart")

    favorite = subparsers.add_parser("favorite", help="Toggle a favorite")
    favorite.add_argument("product_id", type=int)

    return parser


def format_product(product) -> str:
    return f"#{product.id:<4} {product.name:<30} {product.brand:<12} {product.price:>10.2f}  stock {product.stock}"


async def execute(storefront: Storefront, args: argparse.Namespace) -> int:
    await storefront.start()
    catalog = storefront.catalog

    if args.command == "catalog":
        print(f"{len(catalog.products)} products in {len(catalog.categories)} categories")
        print(f"Brands: {', '.join(catalog.get_all_brands())}")
        print(f"Featured: {len(catalog.get_featured_products())}, "
              f"on sale: {len(catalog.get_on_sale_products())}, "
              f"best sellers: {len(catalog.get_best_sellers())}")

    elif args.command == "search":
        results = catalog.search_products(args.query)
        if not results:
            print("No products found")
        for product in results:
            print(format_product(product))

    elif args.command == "add":
        product = catalog.get_product_by_id(args.product_id)
        if product is None:
            print(f"Product {args.product_id} not found", file=sys.stderr)
            return 1
        line = await storefront.cart.add_to_cart(product, args.quantity)
        print(f"{product.name}: {line.quantity} in cart")

    elif args.command == "cart":
        if storefront.cart.is_empty():
            print("Cart is empty")
        for item in storefront.cart.items:
            print(f"{item.quantity:>3} x {item.product.name:<30} {item.line_total:>10.2f}")
        print(f"Items: {storefront.cart.get_item_count()}  Total: {storefront.cart.get_cart_total():.2f}")

    elif args.command == "favorite":
        product = catalog.get_product_by_id(args.product_id)
        if product is None:
            print(f"Product {args.product_id} not found", file=sys.stderr)
            return 1
        is_favorite = await storefront.favorites.toggle_favorite(product)
        print(f"{product.name}: {'added to' if is_favorite else 'removed from'} favorites")

    return 0


async def run(args: argparse.Namespace, storefront: Storefront | None = None) -> int:
    storefront = storefront or create_storefront(args.session)
    try:
        return await execute(storefront, args)
    except StorefrontException as e:
        logger.warning(f"Command '{args.command}' failed: {e!r}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        await storefront.close()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()
    validate_or_exit(config)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
