from datetime import datetime, timezone
from typing import Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.domain.errors import CartConflictError, InvalidArgumentError, NotFoundError
from storefront.domain.owner import CartOwner, AuthenticatedUser, AnonymousSession
from storefront.repos.cart_repo import CartRepo
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

class CartService:
    """
    use cases for the cart aggregate
    commands (add, set quantity, remove, clear) lock the cart row and bump its version
    queries (get_cart, get_or_create) never touch the version
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)

    #queries
    def get_cart(self, owner: CartOwner) -> CartModel:
        """
        The owner's cart. An anonymous caller without a cart gets an empty, unsaved
        one; its row is created by the first add_item.
        """
        cart = self.repo.get_cart_by_owner(owner)
        if cart:
            return cart
        if isinstance(owner, AnonymousSession):
            return CartModel(session_token=owner.token, created_at=datetime.now(timezone.utc))
        return self.get_or_create(owner)

    def get_or_create(self, owner: CartOwner) -> CartModel:
        cart = self.repo.get_cart_by_owner(owner)
        if cart:
            return cart

        if isinstance(owner, AuthenticatedUser):
            new_cart = CartModel(user_id=owner.user_id, version=1)
        else:
            new_cart = CartModel(session_token=owner.token, version=1)

        try:
            created = self.repo.create_cart(new_cart)
        except IntegrityError:
            # another request created it first
            self.repo.rollback()
            logger.info(f"Cart for {owner} created concurrently, reloading")
            return self.repo.get_cart_by_owner(owner)

        logger.info(f"Created cart {created.id} for {owner}")
        return self.repo.get_cart_by_owner(owner)

    #commands
    def add_item(self, owner: CartOwner, product_id: int, quantity: int) -> Tuple[CartItemModel, bool]:
        """
        Adds a product, merging into the existing line when the product is already
        in the cart. Returns the line item and whether it was newly created.
        """
        if quantity is None or quantity <= 0:
            raise InvalidArgumentError("Quantity must be greater than 0")

        if self.products.get_product(product_id) is None:
            raise NotFoundError("Product")

        self.get_or_create(owner)
        cart = self._lock_cart(owner)

        # merge first: an existing row gets quantity + n
        if self.repo.increment_item_quantity(cart.id, product_id, quantity):
            created = False
        else:
            try:
                self.repo.add_cart_item(
                    CartItemModel(cart_id=cart.id, product_id=product_id, quantity=quantity)
                )
                created = True
            except IntegrityError:
                # lost the insert race on (cart_id, product_id), merge instead
                self.repo.rollback()
                cart = self._lock_cart(owner)
                self.repo.increment_item_quantity(cart.id, product_id, quantity)
                created = False

        self._bump_version(cart)
        self.repo.commit()

        item = self.repo.get_cart_item(cart.id, product_id)
        logger.info(
            f"Product {product_id} {'added to' if created else 'merged into'} cart {cart.id}, "
            f"quantity now {item.quantity}"
        )
        return item, created

    def set_item_quantity(self, owner: CartOwner, item_id: int, quantity: int) -> CartModel:
        if quantity is None or quantity < 0:
            raise InvalidArgumentError("Quantity must be 0 or greater")

        if quantity == 0:
            return self.remove_item(owner, item_id)

        cart = self._lock_cart(owner)
        if not self.repo.set_item_quantity(cart.id, item_id, quantity):
            self.repo.rollback()
            raise NotFoundError("Cart item")

        self._bump_version(cart)
        self.repo.commit()
        logger.info(f"Cart item {item_id} in cart {cart.id} set to {quantity}")
        return self.repo.get_cart_by_owner(owner)

    def remove_item(self, owner: CartOwner, item_id: int) -> CartModel:
        cart = self._lock_cart(owner)

        if not self.repo.delete_cart_item(cart.id, item_id):
            self.repo.rollback()
            raise NotFoundError("Cart item")

        self._bump_version(cart)
        self.repo.commit()
        logger.info(f"Cart item {item_id} removed from cart {cart.id}")
        return self.repo.get_cart_by_owner(owner)

    def clear(self, owner: CartOwner) -> int:
        """Deletes every line item; the cart row itself is kept for reuse."""
        cart = self._lock_cart(owner)

        removed = self.repo.clear_cart_items(cart.id)
        self._bump_version(cart)
        self.repo.commit()

        logger.info(f"Cart {cart.id} cleared, {removed} items removed")
        return removed

    def _lock_cart(self, owner: CartOwner) -> CartModel:
        # SELECT ... FOR UPDATE, held until commit; checkout takes the same row lock
        cart = self.repo.lock_cart_by_owner(owner)
        if not cart:
            self.repo.rollback()
            raise NotFoundError("Cart")
        return cart

    def _bump_version(self, cart: CartModel) -> None:
        # update carts set version = v + 1 where id = :id and version = v
        # a checkout that read version v before this commit fails its own compare-and-set
        rowcount = self.repo.update_cart_version(
            cart_id=cart.id,
            old_version=cart.version,
            new_data={"version": cart.version + 1},
        )
        if rowcount == 0:
            self.repo.rollback()
            logger.warning(f"Cart {cart.id} changed under command, version {cart.version} is stale")
            raise CartConflictError()
