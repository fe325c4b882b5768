# storefront/services/product_service.py
from typing import Iterable, List

from sqlalchemy.orm import Session

from storefront.data.models.category import CategoryModel
from storefront.data.models.product import ProductModel
from storefront.domain.errors import InvalidArgumentError, NotFoundError
from storefront.domain.schemas import ProductCreate, ProductUpdate
from storefront.repos.category_repo import CategoryRepo
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class ProductService:
    def __init__(self, db: Session):
        self.repo = ProductRepo(db)
        self.categories = CategoryRepo(db)

    def list_products(self) -> List[ProductModel]:
        return self.repo.list_products()

    def get_product(self, product_id: int) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError("Product")
        return product

    def create_product(self, payload: ProductCreate) -> ProductModel:
        product = self.repo.create_product(
            ProductModel(
                name=payload.name,
                description=payload.description,
                price=payload.price,
                quantity_available=payload.quantity_available,
                categories=self._resolve_categories(payload.category_ids),
            )
        )
        logger.info(
            f"Product {product.id} created at price {product.price}, "
            f"categories {[c.id for c in product.categories]}"
        )
        return product

    def update_product(self, product_id: int, payload: ProductUpdate) -> ProductModel:
        product = self.get_product(product_id)

        changes = payload.model_dump(exclude_unset=True)
        if changes.get("name", "") is None:
            raise InvalidArgumentError("Product name cannot be null")
        if "price" in changes and changes["price"] is None:
            raise InvalidArgumentError("Product price cannot be null")
        if "quantity_available" in changes and changes["quantity_available"] is None:
            raise InvalidArgumentError("Product quantity cannot be null")
        if "category_ids" in changes:
            category_ids = changes.pop("category_ids")
            if category_ids is None:
                raise InvalidArgumentError("Product categories cannot be null, send [] to unlink all")
            # replaces the links, [] leaves the product without categories
            changes["categories"] = self._resolve_categories(category_ids)

        updated = self.repo.update_product(product, changes)
        logger.info(f"Product {product_id} updated: {sorted(changes)}")
        return updated

    def delete_product(self, product_id: int) -> None:
        """
        Removes the product. It disappears from every cart; past purchases keep
        their line with the copied name and price, only the product link is cleared.
        """
        product = self.get_product(product_id)
        self.repo.delete_product(product)
        logger.info(f"Product {product_id} deleted")

    def _resolve_categories(self, category_ids: Iterable[int]) -> List[CategoryModel]:
        wanted = set(category_ids)
        if not wanted:
            return []
        found = self.categories.get_categories(wanted)
        if len(found) != len(wanted):
            missing = sorted(wanted - {c.id for c in found})
            logger.info(f"Unknown category ids {missing}")
            raise NotFoundError("Category")
        return found
