# storefront/database/seed.py
import logging
from decimal import Decimal
from ..services.category_service import CategoryService
from ..services.product_service import ProductService

logger = logging.getLogger(__name__)

SEED_CATEGORIES = [
    "Electronics",
    "Clothing & Fashion",
    "Home & Garden",
    "Sports & Outdoors",
    "Books & Education",
]

SEED_PRODUCTS = [
    ("Electronics", 10001, "iPhone 15 Pro",
     "Latest Apple iPhone with advanced camera system and A17 Pro chip", "999.99", 50),
    ("Electronics", 10002, "Samsung Galaxy S24",
     "Premium Android smartphone with AI-powered features", "899.99", 35),
    ("Electronics", 10003, "Sony WH-1000XM5 Headphones",
     "Industry-leading noise canceling wireless headphones", "349.99", 75),
    ("Clothing & Fashion", 20001, "Classic Denim Jacket",
     "Timeless denim jacket in medium wash", "79.99", 40),
    ("Clothing & Fashion", 20002, "Running Sneakers",
     "Lightweight sneakers with breathable mesh upper", "119.50", 60),
    ("Home & Garden", 30001, "Ceramic Plant Pot Set",
     "Set of three glazed ceramic pots with drainage", "34.95", 25),
    ("Sports & Outdoors", 40001, "Camping Tent 4-Person",
     "Waterproof dome tent with easy setup", "189.00", 15),
    ("Books & Education", 50001, "Python Crash Course",
     "Hands-on, project-based introduction to programming", "39.99", 100),
]

async def seed_catalog(db) -> bool:
    """Insert sample categories and products into an empty catalog"""
    category_service = CategoryService(db)
    product_service = ProductService(db)

    if await category_service.count_categories() > 0:
        logger.info("Catalog already has categories, skipping seed")
        return False

    category_ids = {}
    for name in SEED_CATEGORIES:
        category = await category_service.create_category({'name': name})
        category_ids[name] = category.category_id

    for category, sku, name, description, price, stock in SEED_PRODUCTS:
        await product_service.create_product({
            'category_id': category_ids[category],
            'sku': sku,
            'name': name,
            'description': description,
            'price': Decimal(price),
            'stock': stock
        })

    logger.info(
        f"Seeded {len(SEED_CATEGORIES)} categories and {len(SEED_PRODUCTS)} products"
    )
    return True
