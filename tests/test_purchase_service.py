"""
Tests for purchase history queries.
"""
from decimal import Decimal

import pytest

from storefront.data.models import PurchaseItemModel, PurchaseModel
from storefront.domain.errors import InvalidArgumentError, NotFoundError
from storefront.services.purchase_service import PurchaseService, normalize_status


@pytest.fixture
def svc(session):
    return PurchaseService(session)


@pytest.fixture
def make_purchase(database):
    def _make(user_id: int, status: str = "PENDING", total: str = "10.00") -> int:
        with database.session_scope() as db:
            purchase = PurchaseModel(
                user_id=user_id,
                status=status,
                total=Decimal(total),
                items=[
                    PurchaseItemModel(
                        product_id=None,
                        product_name="Archived product",
                        quantity=1,
                        price_at_purchase=Decimal(total),
                    )
                ],
            )
            db.add(purchase)
            db.flush()
            return purchase.id

    return _make


class TestNormalizeStatus:

    @pytest.mark.parametrize("raw,expected", [
        ("pending", "PENDING"),
        ("Completed", "COMPLETED"),
        (" COMPLETED ", "COMPLETED"),
    ])
    def test_accepts_any_case(self, raw, expected):
        assert normalize_status(raw) == expected

    @pytest.mark.parametrize("raw", ["shipped", "", None])
    def test_rejects_unknown(self, raw):
        with pytest.raises(InvalidArgumentError) as exc:
            normalize_status(raw)
        assert exc.value.message == 'Invalid status. Must be "pending" or "completed".'


class TestListing:

    def test_newest_first(self, svc, make_user, make_purchase):
        make_user(1)
        first = make_purchase(1)
        second = make_purchase(1)

        assert [p.id for p in svc.list_by_owner(1)] == [second, first]

    def test_only_own_purchases(self, svc, make_user, make_purchase):
        make_user(1)
        make_user(2, name="Other")
        mine = make_purchase(1)
        make_purchase(2)

        assert [p.id for p in svc.list_by_owner(1)] == [mine]

    def test_no_purchases(self, svc, make_user):
        make_user(1)
        assert svc.list_by_owner(1) == []

    def test_filter_by_status(self, svc, make_user, make_purchase):
        make_user(1)
        make_purchase(1, status="PENDING")
        completed = make_purchase(1, status="COMPLETED")

        result = svc.list_by_owner_and_status(1, "completed")
        assert [p.id for p in result] == [completed]
        assert len(svc.list_by_owner_and_status(1, "Pending")) == 1

    def test_filter_with_invalid_status(self, svc, make_user):
        make_user(1)
        with pytest.raises(InvalidArgumentError):
            svc.list_by_owner_and_status(1, "cancelled")

    def test_items_are_loaded(self, svc, make_user, make_purchase):
        make_user(1)
        make_purchase(1, total="12.50")
        purchase = svc.list_by_owner(1)[0]
        assert purchase.items[0].product_id is None
        assert purchase.items[0].price_at_purchase == Decimal("12.50")


class TestGetById:

    def test_own_purchase(self, svc, make_user, make_purchase):
        make_user(1)
        purchase_id = make_purchase(1)
        assert svc.get_by_id(1, purchase_id).id == purchase_id

    def test_other_users_purchase_is_not_found(self, svc, make_user, make_purchase):
        make_user(1)
        make_user(2, name="Other")
        purchase_id = make_purchase(2)

        with pytest.raises(NotFoundError) as exc:
            svc.get_by_id(1, purchase_id)
        assert exc.value.message == "Purchase not found"

    def test_missing_purchase(self, svc, make_user):
        make_user(1)
        with pytest.raises(NotFoundError):
            svc.get_by_id(1, 404)
