"""Order domain constants.

Defines status choices and valid status transitions for the order
state machine: PLACED -> OUT_FOR_DELIVERY -> DELIVERED.  The machine is
linear and DELIVERED is terminal.
"""

from decimal import Decimal

from django.db import models


class OrderStatus(models.TextChoices):
    PLACED = "PLACED", "Placed"
    OUT_FOR_DELIVERY = "OUT_FOR_DELIVERY", "Out for delivery"
    DELIVERED = "DELIVERED", "Delivered"


class PaymentStatus(models.TextChoices):
    PAID = "PAID", "Paid"


class PaymentMethod(models.TextChoices):
    RAZORPAY = "RAZORPAY", "Razorpay"


VALID_TRANSITIONS: dict[str, set[str]] = {
    OrderStatus.PLACED: {OrderStatus.OUT_FOR_DELIVERY},
    OrderStatus.OUT_FOR_DELIVERY: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),
}

ESTIMATED_DELIVERY_MINUTES = 45

AGENT_COMMISSION_RATE = Decimal("0.15")

CENT = Decimal("0.01")
