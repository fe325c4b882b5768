#import all models so SQLAlchemy registers them in Base.metadata

from storefront.data.models.user import UserModel
from storefront.data.models.category import CategoryModel, products_category
from storefront.data.models.product import ProductModel
from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.purchase import PurchaseModel, PURCHASE_STATUSES
from storefront.data.models.purchase_item import PurchaseItemModel

__all__ = [
    "UserModel",
    "CategoryModel",
    "products_category",
    "ProductModel",
    "CartModel",
    "CartItemModel",
    "PurchaseModel",
    "PurchaseItemModel",
    "PURCHASE_STATUSES",
]
