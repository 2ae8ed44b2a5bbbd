"""Order and OrderItem models.

Business rules implemented:
- Orders move PLACED -> OUT_FOR_DELIVERY -> DELIVERED, never backwards
  and never skipping a state (validated at service layer through
  ``Order.can_transition_to``).
- ``estimated_delivery`` is always ``order_date`` + 45 minutes.
- Customer and restaurant FKs use PROTECT and never change after creation.
- ``agent`` is only set by assignment; SET_NULL keeps the order if the
  agent record is removed.
- OrderItem is a **snapshot** of the cart line (name, price, image) and
  does not follow later catalog changes.
- OrderItem quantity is at least 1 (DB check constraint).
"""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.orders.constants import (
    ESTIMATED_DELIVERY_MINUTES,
    VALID_TRANSITIONS,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
)


class Order(BaseModel):
    """Order aggregate root."""

    customer: models.ForeignKey = models.ForeignKey(
        "customers.Customer",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    restaurant: models.ForeignKey = models.ForeignKey(
        "catalog.Restaurant",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    agent: models.ForeignKey = models.ForeignKey(
        "agents.DeliveryAgent",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )
    status: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PLACED,
    )
    total_amount: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    order_date: models.DateTimeField = models.DateTimeField()
    estimated_delivery: models.DateTimeField = models.DateTimeField()
    delivery_address: models.TextField = models.TextField(blank=True, default="")
    payment_status: models.CharField = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PAID,
    )
    payment_method: models.CharField = models.CharField(
        max_length=20,
        choices=PaymentMethod.choices,
        default=PaymentMethod.RAZORPAY,
    )
    razorpay_order_id: models.CharField = models.CharField(
        max_length=255, blank=True, default=""
    )
    razorpay_payment_id: models.CharField = models.CharField(
        max_length=255, blank=True, default=""
    )
    razorpay_signature: models.CharField = models.CharField(
        max_length=512, blank=True, default=""
    )

    class Meta:
        db_table = "orders"
        ordering = ["-order_date", "-id"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["agent", "status"], name="orders_agent_status_idx"),
            models.Index(
                fields=["customer", "-order_date"], name="orders_customer_date_idx"
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(total_amount__gte=0),
                name="orders_total_amount_non_negative",
            ),
        ]

    # ------------------------------------------------------------------
    # State Machine helpers
    # ------------------------------------------------------------------

    def can_transition_to(self, new_status: str) -> bool:
        """Check whether transitioning to *new_status* is valid."""
        allowed = VALID_TRANSITIONS.get(self.status, set())
        return new_status in allowed

    @staticmethod
    def estimate_delivery(order_date: datetime) -> datetime:
        return order_date + timedelta(minutes=ESTIMATED_DELIVERY_MINUTES)

    def __str__(self) -> str:
        return f"Order {self.id} ({self.status})"


class OrderItem(BaseModel):
    """Line item snapshot copied from the customer's cart."""

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    menu_item: models.ForeignKey = models.ForeignKey(
        "catalog.MenuItem",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="order_items",
    )
    name: models.CharField = models.CharField(max_length=255)
    price: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
    )
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
    )
    image_url: models.CharField = models.CharField(
        max_length=500, blank=True, default=""
    )

    class Meta:
        db_table = "order_items"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_items_quantity_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} x{self.quantity}"
