# storefront/services/purchase_service.py
from typing import List

from sqlalchemy.orm import Session

from storefront.data.models.purchase import PurchaseModel, PURCHASE_STATUSES
from storefront.domain.errors import InvalidArgumentError, NotFoundError
from storefront.repos.purchase_repo import PurchaseRepo


def normalize_status(status: str | None) -> str:
    """'completed', 'Completed', ... -> 'COMPLETED'; anything else is rejected."""
    normalized = (status or "").strip().upper()
    if normalized not in PURCHASE_STATUSES:
        raise InvalidArgumentError('Invalid status. Must be "pending" or "completed".')
    return normalized


class PurchaseService:
    """Read side of purchases, always scoped to the owner, newest first."""

    def __init__(self, db: Session):
        self.repo = PurchaseRepo(db)

    def list_by_owner(self, user_id: int) -> List[PurchaseModel]:
        return self.repo.list_purchases_for_user(user_id)

    def list_by_owner_and_status(self, user_id: int, status: str) -> List[PurchaseModel]:
        return self.repo.list_purchases_for_user(user_id, status=normalize_status(status))

    def get_by_id(self, user_id: int, purchase_id: int) -> PurchaseModel:
        purchase = self.repo.get_purchase_for_user(purchase_id, user_id)
        if not purchase:
            # same answer whether it does not exist or belongs to someone else
            raise NotFoundError("Purchase")
        return purchase
