# storefront/api/routers/purchases.py
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from storefront.api.deps import CurrentUser, get_current_user, get_db, get_lock_service
from storefront.domain.owner import AuthenticatedUser
from storefront.domain.schemas import PurchaseOut
from storefront.services.checkout_service import CheckoutService
from storefront.services.lock_service import LockService
from storefront.services.purchase_service import PurchaseService
from storefront.utils.retry import conflict_retry

router = APIRouter(prefix="/purchase", tags=["purchase"])


def get_checkout_service(
    db: Session = Depends(get_db),
    lock_service: Optional[LockService] = Depends(get_lock_service),
) -> CheckoutService:
    return CheckoutService(db=db, lock_service=lock_service)


def get_purchase_service(db: Session = Depends(get_db)) -> PurchaseService:
    return PurchaseService(db)


@router.post("", response_model=PurchaseOut, status_code=status.HTTP_201_CREATED)
def create_purchase(
    current_user: CurrentUser = Depends(get_current_user),
    svc: CheckoutService = Depends(get_checkout_service),
):
    """
    Checks out the caller's whole cart.
    A conflicting concurrent checkout is retried a few times before answering 409.
    """
    checkout = conflict_retry()(svc.checkout)
    return checkout(AuthenticatedUser(user_id=current_user.id))


@router.get("", response_model=List[PurchaseOut])
def list_purchases(
    current_user: CurrentUser = Depends(get_current_user),
    svc: PurchaseService = Depends(get_purchase_service),
):
    return svc.list_by_owner(current_user.id)


@router.get("/status/{purchase_status}", response_model=List[PurchaseOut])
def list_purchases_by_status(
    purchase_status: str,
    current_user: CurrentUser = Depends(get_current_user),
    svc: PurchaseService = Depends(get_purchase_service),
):
    return svc.list_by_owner_and_status(current_user.id, purchase_status)


@router.get("/{purchase_id}", response_model=PurchaseOut)
def get_purchase(
    purchase_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    svc: PurchaseService = Depends(get_purchase_service),
):
    return svc.get_by_id(current_user.id, purchase_id)
