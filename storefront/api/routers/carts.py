#storefront/api/routers/carts.py
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from storefront.api.deps import get_cart_owner, get_db
from storefront.domain.owner import CartOwner
from storefront.domain.schemas import (
    CartItemIn,
    CartItemOut,
    CartItemQuantityIn,
    CartOut,
)
from storefront.services.cart_service import CartService
from storefront.utils.retry import conflict_retry

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session = Depends(get_db)) -> CartService:
    return CartService(db=db)


@router.get("", response_model=CartOut)
def get_cart(
    owner: CartOwner = Depends(get_cart_owner),
    svc: CartService = Depends(get_service),
):
    return svc.get_cart(owner)


@router.post("/items", response_model=CartItemOut, status_code=status.HTTP_201_CREATED)
def add_item(
    payload: CartItemIn,
    response: Response,
    owner: CartOwner = Depends(get_cart_owner),
    svc: CartService = Depends(get_service),
):
    """
    Adds a product. 201 when a new line is created, 200 when the quantity was
    merged into the existing line for that product.
    """
    item, created = conflict_retry()(svc.add_item)(owner, payload.product_id, payload.quantity)
    if not created:
        response.status_code = status.HTTP_200_OK
    return item


@router.put("/items/{item_id}", response_model=CartOut)
def set_item_quantity(
    item_id: int,
    payload: CartItemQuantityIn,
    owner: CartOwner = Depends(get_cart_owner),
    svc: CartService = Depends(get_service),
):
    return conflict_retry()(svc.set_item_quantity)(owner, item_id, payload.quantity)


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_item(
    item_id: int,
    owner: CartOwner = Depends(get_cart_owner),
    svc: CartService = Depends(get_service),
):
    conflict_retry()(svc.remove_item)(owner, item_id)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def clear_cart(
    owner: CartOwner = Depends(get_cart_owner),
    svc: CartService = Depends(get_service),
):
    conflict_retry()(svc.clear)(owner)
