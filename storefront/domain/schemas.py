# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Literal, Optional
from decimal import Decimal
from datetime import datetime


# ---------------------------------------------------------------- cart

class CartItemIn(BaseModel):
    """Adding a product to the cart."""

    product_id: int = Field(..., gt=0, description="Product id (> 0)")
    quantity: int = Field(..., gt=0, description="Quantity to add (> 0)")


class CartItemQuantityIn(BaseModel):
    """Setting the quantity of a line item, 0 removes it."""

    quantity: int = Field(..., ge=0, description="New quantity (>= 0)")


class ProductBrief(BaseModel):
    id: int
    name: str
    price: Decimal

    model_config = ConfigDict(from_attributes=True)


class CartItemOut(BaseModel):
    id: int
    product_id: int
    quantity: int
    price: Decimal
    subtotal: Decimal
    product: ProductBrief

    model_config = ConfigDict(from_attributes=True)


class CartOut(BaseModel):
    id: Optional[int] = None  # None until the first item is added to an anonymous cart
    user_id: Optional[int] = None
    items: List[CartItemOut]
    total: Decimal
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------- purchases

class PurchaseItemOut(BaseModel):
    id: int
    product_id: Optional[int] = None
    product_name: str
    quantity: int
    price_at_purchase: Decimal

    model_config = ConfigDict(from_attributes=True)


class PurchaseOut(BaseModel):
    id: int
    user_id: int
    status: str
    total: Decimal
    created_at: datetime
    items: List[PurchaseItemOut]

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------- catalog

class CategoryOut(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    quantity_available: int = Field(0, ge=0)
    category_ids: List[int] = Field(default_factory=list, description="Categories to link the product to")


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    quantity_available: Optional[int] = Field(None, ge=0)
    category_ids: Optional[List[int]] = Field(None, description="Replaces the product's categories")


class ProductOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    quantity_available: int
    categories: List[CategoryOut] = []
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------- users

class UserCreate(BaseModel):
    """Registering a user."""

    id: int = Field(..., gt=0, description="User id (> 0)")
    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    role: Literal["client", "seller", "admin"] = "client"


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    role: Optional[Literal["client", "seller", "admin"]] = None


class UserRead(BaseModel):
    id: int
    name: str
    role: str

    model_config = ConfigDict(from_attributes=True)
