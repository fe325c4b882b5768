# storefront/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from storefront.api.deps import CurrentUser, get_db, require_roles
from storefront.domain.schemas import ProductCreate, ProductOut, ProductUpdate
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])

catalog_editor = require_roles("seller", "admin")


def get_service(db: Session = Depends(get_db)) -> ProductService:
    return ProductService(db)


@router.get("", response_model=List[ProductOut])
def list_products(svc: ProductService = Depends(get_service)):
    return svc.list_products()


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, svc: ProductService = Depends(get_service)):
    return svc.get_product(product_id)


@router.post("", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductCreate,
    _: CurrentUser = Depends(catalog_editor),
    svc: ProductService = Depends(get_service),
):
    return svc.create_product(payload)


@router.patch("/{product_id}", response_model=ProductOut)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    _: CurrentUser = Depends(catalog_editor),
    svc: ProductService = Depends(get_service),
):
    return svc.update_product(product_id, payload)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: int,
    _: CurrentUser = Depends(catalog_editor),
    svc: ProductService = Depends(get_service),
):
    svc.delete_product(product_id)
