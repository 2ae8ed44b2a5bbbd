"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.
Creation is wrapped in ``transaction.atomic()`` so the Order aggregate
(Order + OrderItems) is persisted atomically.

Concurrency control on state changes uses ``select_for_update()`` plus
conditional ``UPDATE ... WHERE status = ...`` claims, so a stale read
can never overwrite a concurrent transition.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, List, Optional

import structlog
from django.db import transaction
from django.db.models import DecimalField, Sum, Value
from django.db.models.functions import Coalesce
from django.utils import timezone

from modules.orders.constants import CENT, OrderStatus
from modules.orders.models import Order, OrderItem
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Create (aggregate root + children)
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(self, data: Dict[str, Any]) -> Order:
        order = Order.objects.create(
            customer_id=data["customer_id"],
            restaurant_id=data["restaurant_id"],
            status=OrderStatus.PLACED,
            total_amount=data["total_amount"],
            order_date=data["order_date"],
            estimated_delivery=data["estimated_delivery"],
            delivery_address=data.get("delivery_address", ""),
            razorpay_order_id=data.get("razorpay_order_id", ""),
            razorpay_payment_id=data.get("razorpay_payment_id", ""),
            razorpay_signature=data.get("razorpay_signature", ""),
        )

        items = data.get("items", [])
        OrderItem.objects.bulk_create(
            [
                OrderItem(
                    order=order,
                    menu_item_id=item_data.get("menu_item_id"),
                    name=item_data["name"],
                    price=item_data["price"],
                    quantity=item_data["quantity"],
                    image_url=item_data.get("image_url", ""),
                )
                for item_data in items
            ]
        )

        logger.info("order.created", order_id=order.id, item_count=len(items))
        return order

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def _with_relations(self):
        return Order.objects.select_related(
            "customer", "restaurant", "agent"
        ).prefetch_related("items")

    def get_by_id(self, id: int) -> Optional[Order]:
        """Retrieve an order with eager-loaded relations.

        Uses ``select_related`` for the customer, restaurant and agent FKs
        (single JOIN) and ``prefetch_related`` for items.  Prevents N+1.
        """
        return self._with_relations().filter(id=id).first()

    def get_for_update(self, id: int) -> Optional[Order]:
        # No select_related: the agent FK is nullable and FOR UPDATE
        # cannot be applied to the nullable side of an outer join.
        return Order.objects.select_for_update().filter(id=id).first()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """List orders with optional Django ORM look-ups.

        Examples of valid filters::

            {"status": OrderStatus.PLACED}
            {"customer_id": 42}
        """
        queryset = self._with_relations()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def list_for_customer(self, customer_id: int) -> List[Order]:
        return list(
            self._with_relations()
            .filter(customer_id=customer_id)
            .order_by("-order_date", "-id")
        )

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    def count(self) -> int:
        return Order.objects.count()

    def count_by_status(self, status: OrderStatus) -> int:
        return Order.objects.filter(status=status).count()

    def sum_total_by_status(self, status: OrderStatus) -> Decimal:
        result = Order.objects.filter(status=status).aggregate(
            total=Coalesce(
                Sum("total_amount"),
                Value(Decimal("0.00")),
                output_field=DecimalField(max_digits=12, decimal_places=2),
            )
        )
        total = result["total"] if result["total"] is not None else Decimal("0")
        # SQLite sums decimals as floats; normalise to cents.
        return total.quantize(CENT, rounding=ROUND_HALF_UP)

    def get_active_order_ids(self, agent_ids: Iterable[int]) -> Dict[int, int]:
        ids = list(agent_ids)
        if not ids:
            return {}
        rows = (
            Order.objects.filter(agent_id__in=ids, status=OrderStatus.OUT_FOR_DELIVERY)
            .order_by("order_date", "id")
            .values_list("agent_id", "id")
        )
        active: Dict[int, int] = {}
        for agent_id, order_id in rows:
            active.setdefault(agent_id, order_id)
        return active

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def claim_for_delivery(self, id: int, agent_id: int) -> bool:
        updated = Order.objects.filter(id=id, status=OrderStatus.PLACED).update(
            agent_id=agent_id,
            status=OrderStatus.OUT_FOR_DELIVERY,
            updated_at=timezone.now(),
        )
        logger.info(
            "order.claim_for_delivery",
            order_id=id,
            agent_id=agent_id,
            claimed=bool(updated),
        )
        return updated == 1

    def save(
        self, entity: Order, update_fields: Optional[Iterable[str]] = None
    ) -> Order:
        entity.save(update_fields=list(update_fields) if update_fields else None)
        logger.info("order.saved", order_id=entity.id, status=entity.status)
        return entity
