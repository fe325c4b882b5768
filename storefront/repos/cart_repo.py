# storefront/repos/cart_repo.py
from typing import List

from sqlalchemy import select, update, delete
from sqlalchemy.orm import Session, selectinload, joinedload

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.domain.owner import CartOwner, AuthenticatedUser, AnonymousSession


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------ carts
    def _owner_clause(self, owner: CartOwner):
        if isinstance(owner, AuthenticatedUser):
            return CartModel.user_id == owner.user_id
        if isinstance(owner, AnonymousSession):
            return CartModel.session_token == owner.token
        raise TypeError(f"Unsupported cart owner: {owner!r}")

    def get_cart_by_owner(self, owner: CartOwner) -> CartModel | None:
        return self.db.execute(
            select(CartModel)
            .where(self._owner_clause(owner))
            .options(selectinload(CartModel.items).joinedload(CartItemModel.product))
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def lock_cart_by_owner(self, owner: CartOwner) -> CartModel | None:
        # SELECT ... FOR UPDATE, concurrent checkouts of the same cart queue up here
        return self.db.execute(
            select(CartModel)
            .where(self._owner_clause(owner))
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.commit()
        self.db.refresh(cart)
        return cart

    def update_cart_version(self, cart_id: int, old_version: int, new_data: dict) -> int:
        result = self.db.execute(
            update(CartModel)
            .where(CartModel.id == cart_id, CartModel.version == old_version)
            .values(**new_data)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    # ------------------------------------------------------------ items
    def get_cart_items(self, cart_id: int) -> List[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.cart_id == cart_id)
                .options(joinedload(CartItemModel.product))
                .order_by(CartItemModel.id)
                .execution_options(populate_existing=True)
            ).scalars().unique()
        )

    def get_cart_item(self, cart_id: int, product_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def increment_item_quantity(self, cart_id: int, product_id: int, quantity: int) -> int:
        # quantity = quantity + n in the database, no lost update between two adds
        result = self.db.execute(
            update(CartItemModel)
            .where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
            .values(quantity=CartItemModel.quantity + quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def set_item_quantity(self, cart_id: int, item_id: int, quantity: int) -> int:
        # ownership is part of the predicate, an item of another cart matches nothing
        result = self.db.execute(
            update(CartItemModel)
            .where(CartItemModel.id == item_id, CartItemModel.cart_id == cart_id)
            .values(quantity=quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def delete_cart_item(self, cart_id: int, item_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.id == item_id, CartItemModel.cart_id == cart_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def clear_cart_items(self, cart_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.cart_id == cart_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    # ------------------------------------------------------------ tx
    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
