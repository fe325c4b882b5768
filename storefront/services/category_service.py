from typing import List

from sqlalchemy.orm import Session

from storefront.data.models.category import CategoryModel
from storefront.repos.category_repo import CategoryRepo


class CategoryService:
    """Read-only, categories are managed through the seed."""

    def __init__(self, db: Session):
        self.repo = CategoryRepo(db)

    def list_categories(self) -> List[CategoryModel]:
        return self.repo.list_categories()
