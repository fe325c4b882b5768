# storefront/services/checkout_service.py
import uuid
from decimal import Decimal

from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models.purchase import PurchaseModel
from storefront.data.models.purchase_item import PurchaseItemModel
from storefront.domain.errors import (
    CheckoutConflictError,
    EmptyCartError,
    StorageUnavailableError,
    StorefrontError,
)
from storefront.domain.owner import AuthenticatedUser
from storefront.repos.cart_repo import CartRepo
from storefront.repos.purchase_repo import PurchaseRepo
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService
from storefront.utils.settings import CHECKOUT_LOCK_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CheckoutService:
    """
    Turns the owner's cart into a purchase.

    Everything that writes (purchase, purchase lines, emptying the cart, bumping the
    cart version) runs in one transaction; any failure rolls all of it back and the
    cart is left exactly as it was. Two checkouts of the same cart are serialized by
    the optional Redis lock, the row lock on the cart and the version compare-and-set.
    """

    def __init__(
        self,
        db: Session,
        lock_service: LockService | None = None,
        notification_service: NotificationService | None = None,
        lock_ttl: int = CHECKOUT_LOCK_TTL_SECONDS,
    ):
        self.db = db
        self.carts = CartRepo(db)
        self.purchases = PurchaseRepo(db)
        self.lock_service = lock_service
        self.notification_service = notification_service or NotificationService()
        self.lock_ttl = lock_ttl

    def checkout(self, owner: AuthenticatedUser) -> PurchaseModel:
        """
        1. Loads the cart with current product prices, no cart or no lines -> EmptyCartError
        2. Computes the total from that single snapshot
        3. Inserts the purchase + lines and empties the cart atomically
        4. Returns the purchase with its lines
        """
        cart = self.carts.get_cart_by_owner(owner)
        if not cart or not cart.items:
            raise EmptyCartError()

        token = uuid.uuid4().hex
        if self.lock_service is not None:
            try:
                locked = self.lock_service.acquire_checkout_lock(cart.id, token, self.lock_ttl)
            except RedisError as e:
                self.db.rollback()
                logger.error(f"Checkout lock unavailable for cart {cart.id}: {e}")
                raise StorageUnavailableError(str(e)) from e

            if not locked:
                self.db.rollback()
                logger.warning(f"Checkout of cart {cart.id} already in progress")
                raise CheckoutConflictError()

        try:
            purchase = self._checkout_in_transaction(owner)
        finally:
            if self.lock_service is not None:
                self._release_lock(cart.id, token)

        logger.info(
            f"Purchase {purchase.id} created for user {owner.user_id}: "
            f"{len(purchase.items)} lines, total {purchase.total}"
        )

        self.notification_service.send_purchase_notification(owner.user_id, purchase.id, purchase.total)
        return purchase

    def _checkout_in_transaction(self, owner: AuthenticatedUser) -> PurchaseModel:
        try:
            # re-read under the row lock, a checkout that got here first has emptied it
            cart = self.carts.lock_cart_by_owner(owner)
            if not cart:
                raise EmptyCartError()

            lines = self.carts.get_cart_items(cart.id)
            if not lines:
                raise EmptyCartError()

            total = sum((line.quantity * line.product.price for line in lines), Decimal("0.00"))

            purchase = PurchaseModel(
                user_id=owner.user_id,
                status="PENDING",
                total=total,
                items=[
                    PurchaseItemModel(
                        product_id=line.product_id,
                        product_name=line.product.name,
                        quantity=line.quantity,
                        price_at_purchase=line.product.price,
                    )
                    for line in lines
                ],
            )
            self.purchases.add_purchase(purchase)

            self.carts.clear_cart_items(cart.id)

            # update carts set version = v + 1 where id = :id and version = v
            rowcount = self.carts.update_cart_version(
                cart_id=cart.id,
                old_version=cart.version,
                new_data={"version": cart.version + 1},
            )
            if rowcount == 0:
                raise CheckoutConflictError()

            self.db.commit()
            return purchase

        except StorefrontError as e:
            self.db.rollback()
            logger.info(f"Checkout for user {owner.user_id} rolled back: {e.code}")
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(f"Checkout for user {owner.user_id} failed in storage")
            raise StorageUnavailableError(str(e)) from e

    def _release_lock(self, cart_id: int, token: str) -> None:
        try:
            self.lock_service.release_checkout_lock(cart_id, token)
        except RedisError as e:
            # the key has a TTL, it goes away on its own
            logger.warning(f"Failed to release checkout lock for cart {cart_id}: {e}")
