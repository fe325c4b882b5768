# storefront/data/models/category.py
from sqlalchemy import Column, Integer, String, ForeignKey, Table

from storefront.data.database import Base

# link table, rows go away with either side
products_category = Table(
    "products_category",
    Base.metadata,
    Column("product_id", Integer, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", Integer, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)


class CategoryModel(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False, unique=True)
