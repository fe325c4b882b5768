"""
Tests for the cart aggregate: creation, merge-on-add, quantity updates, removal.
"""
from decimal import Decimal

import pytest

from storefront.data.models import CartModel
from storefront.domain.errors import CartConflictError, InvalidArgumentError, NotFoundError
from storefront.repos.cart_repo import CartRepo
from storefront.domain.owner import AnonymousSession, AuthenticatedUser
from storefront.services.cart_service import CartService
from storefront.services.product_service import ProductService


@pytest.fixture
def user(make_user):
    return AuthenticatedUser(user_id=make_user(1))


@pytest.fixture
def svc(session):
    return CartService(session)


class TestGetOrCreate:

    def test_creates_empty_cart_on_first_visit(self, svc, user):
        cart = svc.get_or_create(user)
        assert cart.id is not None
        assert cart.user_id == user.user_id
        assert cart.items == []
        assert cart.total == Decimal("0")
        assert cart.version == 1

    def test_returns_the_same_cart_afterwards(self, svc, user):
        first = svc.get_or_create(user)
        second = svc.get_or_create(user)
        assert first.id == second.id

    def test_anonymous_and_user_carts_are_separate(self, svc, user):
        anonymous = AnonymousSession(token="abc123")
        user_cart = svc.get_or_create(user)
        anon_cart = svc.get_or_create(anonymous)
        assert user_cart.id != anon_cart.id
        assert anon_cart.user_id is None
        assert anon_cart.session_token == "abc123"


class TestGetCart:

    def test_anonymous_cart_is_not_saved_until_first_item(self, session, svc, make_product):
        owner = AnonymousSession(token="guest")

        cart = svc.get_cart(owner)
        assert cart.id is None
        assert cart.items == []
        assert cart.total == Decimal("0")
        assert session.query(CartModel).count() == 0

        svc.add_item(owner, make_product(), 1)
        assert session.query(CartModel).count() == 1
        assert svc.get_cart(owner).id is not None

    def test_user_cart_is_created(self, session, svc, user):
        cart = svc.get_cart(user)
        assert cart.id is not None
        assert session.query(CartModel).count() == 1


class TestAddItem:

    def test_new_product_creates_line(self, svc, user, make_product):
        product_id = make_product(price="10.00")
        item, created = svc.add_item(user, product_id, 2)
        assert created is True
        assert item.quantity == 2
        assert item.subtotal == Decimal("20.00")

    def test_same_product_is_merged_into_one_line(self, svc, user, make_product):
        product_id = make_product()
        svc.add_item(user, product_id, 2)
        item, created = svc.add_item(user, product_id, 3)

        assert created is False
        assert item.quantity == 5
        cart = svc.get_or_create(user)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 5

    def test_total_uses_current_prices(self, svc, user, make_product):
        mug = make_product(name="Mug", price="10.00")
        notebook = make_product(name="Notebook", price="15.00")
        svc.add_item(user, mug, 2)
        svc.add_item(user, notebook, 1)

        assert svc.get_or_create(user).total == Decimal("35.00")

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_rejects_non_positive_quantity(self, svc, user, make_product, quantity):
        product_id = make_product()
        with pytest.raises(InvalidArgumentError):
            svc.add_item(user, product_id, quantity)

    def test_unknown_product(self, svc, user):
        with pytest.raises(NotFoundError) as exc:
            svc.add_item(user, 999, 1)
        assert exc.value.message == "Product not found"

    def test_anonymous_owner_can_add(self, svc, make_product):
        owner = AnonymousSession(token="guest")
        product_id = make_product()
        item, created = svc.add_item(owner, product_id, 1)
        assert created is True
        assert svc.get_or_create(owner).items[0].id == item.id


class TestSetItemQuantity:

    def test_sets_quantity(self, svc, user, make_product):
        item, _ = svc.add_item(user, make_product(), 2)
        cart = svc.set_item_quantity(user, item.id, 7)
        assert cart.items[0].quantity == 7

    def test_zero_removes_the_line(self, svc, user, make_product):
        item, _ = svc.add_item(user, make_product(), 2)
        cart = svc.set_item_quantity(user, item.id, 0)
        assert cart.items == []

    def test_rejects_negative_quantity(self, svc, user, make_product):
        item, _ = svc.add_item(user, make_product(), 2)
        with pytest.raises(InvalidArgumentError):
            svc.set_item_quantity(user, item.id, -3)

    def test_item_of_another_cart_is_not_found(self, svc, user, make_user, make_product):
        other = AuthenticatedUser(user_id=make_user(2, name="Other"))
        foreign_item, _ = svc.add_item(other, make_product(), 1)
        svc.get_or_create(user)

        with pytest.raises(NotFoundError):
            svc.set_item_quantity(user, foreign_item.id, 5)
        assert svc.get_or_create(other).items[0].quantity == 1


class TestRemoveAndClear:

    def test_remove_item(self, svc, user, make_product):
        item, _ = svc.add_item(user, make_product(), 1)
        cart = svc.remove_item(user, item.id)
        assert cart.items == []

    def test_second_remove_is_not_found(self, svc, user, make_product):
        item, _ = svc.add_item(user, make_product(), 1)
        svc.remove_item(user, item.id)
        with pytest.raises(NotFoundError):
            svc.remove_item(user, item.id)

    def test_remove_without_cart(self, svc, user):
        with pytest.raises(NotFoundError) as exc:
            svc.remove_item(user, 1)
        assert exc.value.message == "Cart not found"

    def test_clear_keeps_the_cart(self, svc, user, make_product):
        svc.add_item(user, make_product(name="A"), 1)
        svc.add_item(user, make_product(name="B"), 4)
        cart_id = svc.get_or_create(user).id

        assert svc.clear(user) == 2
        cart = svc.get_or_create(user)
        assert cart.id == cart_id
        assert cart.items == []

    def test_clear_without_cart(self, svc, user):
        with pytest.raises(NotFoundError):
            svc.clear(user)


def test_deleted_product_leaves_the_cart(session, svc, user, make_product):
    keep = make_product(name="Keep")
    gone = make_product(name="Gone")
    svc.add_item(user, keep, 1)
    svc.add_item(user, gone, 1)

    ProductService(session).delete_product(gone)

    cart = svc.get_or_create(user)
    assert [i.product_id for i in cart.items] == [keep]


class TestVersion:
    """Every command bumps the cart version, reads never do."""

    def test_commands_bump_the_version(self, svc, user, make_product):
        assert svc.get_or_create(user).version == 1

        item, _ = svc.add_item(user, make_product(name="A"), 1)
        assert svc.get_cart(user).version == 2

        svc.add_item(user, item.product_id, 1)
        assert svc.get_cart(user).version == 3

        svc.set_item_quantity(user, item.id, 5)
        assert svc.get_cart(user).version == 4

        svc.remove_item(user, item.id)
        assert svc.get_cart(user).version == 5

        svc.clear(user)
        assert svc.get_cart(user).version == 6

    def test_failed_command_keeps_the_version(self, svc, user):
        svc.get_or_create(user)
        with pytest.raises(NotFoundError):
            svc.remove_item(user, 12345)
        assert svc.get_cart(user).version == 1

    def test_stale_version_is_a_conflict(self, svc, user, make_product, monkeypatch):
        product_id = make_product()
        svc.get_or_create(user)
        monkeypatch.setattr(CartRepo, "update_cart_version", lambda self, cart_id, old_version, new_data: 0)

        with pytest.raises(CartConflictError):
            svc.add_item(user, product_id, 1)

        monkeypatch.undo()
        cart = svc.get_cart(user)
        assert cart.items == []
        assert cart.version == 1
