# storefront/repos/purchase_repo.py
from typing import List

from sqlalchemy import exists, select
from sqlalchemy.orm import Session, selectinload

from storefront.data.models.purchase import PurchaseModel


class PurchaseRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_purchase(self, purchase: PurchaseModel) -> PurchaseModel:
        # flush only, the checkout decides when the transaction commits
        self.db.add(purchase)
        self.db.flush()
        return purchase

    def has_purchases(self, user_id: int) -> bool:
        return self.db.execute(select(exists().where(PurchaseModel.user_id == user_id))).scalar()

    def get_purchase_for_user(self, purchase_id: int, user_id: int) -> PurchaseModel | None:
        return self.db.execute(
            select(PurchaseModel)
            .where(PurchaseModel.id == purchase_id, PurchaseModel.user_id == user_id)
            .options(selectinload(PurchaseModel.items))
        ).scalar_one_or_none()

    def list_purchases_for_user(self, user_id: int, status: str | None = None) -> List[PurchaseModel]:
        stmt = select(PurchaseModel).where(PurchaseModel.user_id == user_id)
        if status is not None:
            stmt = stmt.where(PurchaseModel.status == status)
        stmt = (
            stmt.options(selectinload(PurchaseModel.items))
            .order_by(PurchaseModel.created_at.desc(), PurchaseModel.id.desc())
        )
        return list(self.db.execute(stmt).scalars())
