# storefront/repos/category_repo.py
from typing import Iterable, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.category import CategoryModel


class CategoryRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_categories(self) -> List[CategoryModel]:
        return list(self.db.execute(select(CategoryModel).order_by(CategoryModel.id)).scalars())

    def get_categories(self, category_ids: Iterable[int]) -> List[CategoryModel]:
        return list(
            self.db.execute(
                select(CategoryModel)
                .where(CategoryModel.id.in_(list(category_ids)))
                .order_by(CategoryModel.id)
            ).scalars()
        )
