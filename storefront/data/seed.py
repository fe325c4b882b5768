# storefront/data/seed.py
from decimal import Decimal

from storefront.data.database import Database
from storefront.data.models import CategoryModel, ProductModel, UserModel
from storefront.utils.logging import configure_logging, get_logger
from storefront.utils.settings import DATABASE_URL

logger = get_logger(__name__)

USERS = [
    {"id": 1, "name": "Demo Client", "role": "client"},
    {"id": 2, "name": "Demo Seller", "role": "seller"},
]

CATEGORIES = ["Kitchen", "Stationery"]

# (product, category names)
PRODUCTS = [
    ({"name": "Coffee mug", "description": "Ceramic, 300 ml", "price": Decimal("10.00"), "quantity_available": 100}, ["Kitchen"]),
    ({"name": "Notebook", "description": "A5, dotted", "price": Decimal("15.00"), "quantity_available": 50}, ["Stationery"]),
    ({"name": "Pen", "description": None, "price": Decimal("2.50"), "quantity_available": 500}, ["Stationery"]),
]


def seed(database: Database) -> bool:
    """Inserts demo users, categories and products. Does nothing when products already exist."""
    with database.session_scope() as db:
        # not forcing: only seed if empty
        if db.query(ProductModel).first():
            logger.info("Seed skipped, catalog not empty")
            return False
        for row in USERS:
            if db.get(UserModel, row["id"]) is None:
                db.add(UserModel(**row))

        categories = {c.name: c for c in db.query(CategoryModel)}
        for name in CATEGORIES:
            if name not in categories:
                categories[name] = CategoryModel(name=name)
                db.add(categories[name])

        db.add_all(
            ProductModel(**row, categories=[categories[name] for name in names])
            for row, names in PRODUCTS
        )
    logger.info(f"Seeded {len(USERS)} users, {len(CATEGORIES)} categories and {len(PRODUCTS)} products")
    return True


if __name__ == "__main__":
    configure_logging()
    database = Database(DATABASE_URL)
    database.connect()
    database.create_all()
    try:
        seed(database)
    finally:
        database.dispose()
