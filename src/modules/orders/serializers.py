"""Order DRF serializers for API input.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``; responses are rendered from the
service's output DTOs.
"""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers


class PlaceOrderSerializer(serializers.Serializer):
    """Validates the order placement request payload.

    Line items are taken from the customer's cart, not from the body.
    """

    customer_id = serializers.IntegerField(min_value=1)
    total_amount = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal("0.00")
    )
    delivery_address = serializers.CharField(
        required=False, default="", allow_blank=True
    )
    razorpay_order_id = serializers.CharField(
        required=False, default="", allow_blank=True, max_length=255
    )
    razorpay_payment_id = serializers.CharField(
        required=False, default="", allow_blank=True, max_length=255
    )
    razorpay_signature = serializers.CharField(
        required=False, default="", allow_blank=True, max_length=512
    )


class AssignAgentSerializer(serializers.Serializer):
    order_id = serializers.IntegerField(min_value=1)
    agent_id = serializers.IntegerField(min_value=1)


class DeliverOrderSerializer(serializers.Serializer):
    agent_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)
