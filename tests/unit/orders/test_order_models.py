"""Unit tests for the Order state machine and model constraints."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from django.db import IntegrityError, transaction

from modules.orders.constants import VALID_TRANSITIONS, OrderStatus
from modules.orders.models import Order, OrderItem

pytestmark = pytest.mark.unit


class TestTransitionTable:
    def test_lifecycle_is_linear(self):
        assert VALID_TRANSITIONS[OrderStatus.PLACED] == {OrderStatus.OUT_FOR_DELIVERY}
        assert VALID_TRANSITIONS[OrderStatus.OUT_FOR_DELIVERY] == {
            OrderStatus.DELIVERED
        }
        assert VALID_TRANSITIONS[OrderStatus.DELIVERED] == set()


class TestOrderStateHelpers:
    @pytest.mark.parametrize(
        "current, target, allowed",
        [
            (OrderStatus.PLACED, OrderStatus.OUT_FOR_DELIVERY, True),
            (OrderStatus.PLACED, OrderStatus.DELIVERED, False),
            (OrderStatus.OUT_FOR_DELIVERY, OrderStatus.DELIVERED, True),
            (OrderStatus.OUT_FOR_DELIVERY, OrderStatus.PLACED, False),
            (OrderStatus.DELIVERED, OrderStatus.OUT_FOR_DELIVERY, False),
            (OrderStatus.DELIVERED, OrderStatus.DELIVERED, False),
        ],
    )
    def test_can_transition_to(self, current, target, allowed):
        assert Order(status=current).can_transition_to(target) is allowed

    def test_estimate_delivery_adds_45_minutes(self):
        placed_at = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        assert Order.estimate_delivery(placed_at) == datetime(
            2024, 5, 1, 12, 45, tzinfo=timezone.utc
        )


class TestOrderConstraints:
    def test_new_order_defaults(self, make_order):
        order = make_order()
        assert order.status == OrderStatus.PLACED
        assert order.payment_status == "PAID"
        assert order.payment_method == "RAZORPAY"

    def test_item_quantity_must_be_positive(self, make_order):
        order = make_order()
        with pytest.raises(IntegrityError), transaction.atomic():
            OrderItem.objects.create(
                order=order, name="Lassi", price=Decimal("70.00"), quantity=0
            )

    def test_total_amount_cannot_be_negative(self, make_order):
        order = make_order()
        with pytest.raises(IntegrityError), transaction.atomic():
            Order.objects.filter(id=order.id).update(total_amount=Decimal("-1.00"))

    def test_updated_at_refreshed_with_update_fields(self, make_order):
        order = make_order()
        before = order.updated_at
        order.status = OrderStatus.OUT_FOR_DELIVERY
        order.save(update_fields=["status"])
        order.refresh_from_db()
        assert order.updated_at >= before
        assert order.status == OrderStatus.OUT_FOR_DELIVERY

    def test_default_ordering_is_newest_first(self, make_order):
        older = make_order()
        newer = make_order()
        Order.objects.filter(id=older.id).update(
            order_date=newer.order_date - timedelta(hours=2)
        )
        assert list(Order.objects.values_list("id", flat=True)) == [newer.id, older.id]
