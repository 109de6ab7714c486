# main.py
import argparse
import asyncio
import logging
import sys
from storefront.config import setup_logging
from storefront.database import Database
from storefront.database.seed import seed_catalog
from storefront.exceptions import StorefrontError
from storefront.services import OrderService
from storefront.utils.formatters import format_order

def parse_item(value: str) -> dict:
    """PRODUCT_ID:QUANTITY"""
    try:
        product_id, quantity = value.split(":")
        return {'product_id': int(product_id), 'quantity': int(quantity)}
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected PRODUCT_ID:QUANTITY, got {value!r}")

def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="storefront", description="Storefront catalog backend")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("migrate", help="Apply pending database migrations")
    sub.add_parser("seed", help="Insert sample categories and products")

    place_p = sub.add_parser("place-order", help="Place an order")
    place_p.add_argument("--user", type=int, required=True)
    place_p.add_argument("--item", type=parse_item, action="append", required=True,
                         help="PRODUCT_ID:QUANTITY, repeatable")

    show_p = sub.add_parser("show-order", help="Show an order")
    show_p.add_argument("order_id", type=int)

    return parser

async def run(args) -> int:
    logger = logging.getLogger(__name__)
    db = Database()
    await db.connect()

    try:
        if args.command == "seed":
            await seed_catalog(db)
        elif args.command == "place-order":
            order = await OrderService(db).place_order(args.user, args.item)
            print(format_order(order))
        elif args.command == "show-order":
            order = await OrderService(db).get_order(args.order_id)
            print(format_order(order))
        return 0
    except StorefrontError as e:
        logger.error(f"{args.command} failed ({e.status_code}): {e.message}")
        return 1
    finally:
        await db.close()

def main(argv=None) -> int:
    setup_logging()
    args = create_parser().parse_args(argv)
    return asyncio.run(run(args))

if __name__ == "__main__":
    sys.exit(main())
