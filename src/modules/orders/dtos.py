"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``PlaceOrderDTO``: input for order placement.
- ``OrderItemDTO``: output for a single line item.
- ``OrderResponseDTO``: the customer-facing view of an order.
- ``OrderSummaryDTO``: one row of the admin order list.
- ``OrderDetailDTO``: admin detail view, with assignment candidates.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from modules.agents.dtos import AgentDTO
from modules.orders.constants import OrderStatus

# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class PlaceOrderDTO(BaseModel):
    """Immutable DTO for order placement requests.

    Line items are not part of the request: they come from the
    customer's cart at placement time.  ``total_amount`` is the final
    amount charged by the payment gateway (taxes and fees included).
    """

    model_config = ConfigDict(frozen=True)

    customer_id: int
    total_amount: Decimal = Field(ge=0, decimal_places=2)
    delivery_address: str = ""
    razorpay_order_id: str = ""
    razorpay_payment_id: str = ""
    razorpay_signature: str = ""


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class OrderItemDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    price: Decimal
    quantity: int
    image_url: str


class OrderResponseDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    order_id: int
    status: OrderStatus
    total_amount: Decimal
    order_date: datetime
    estimated_delivery: datetime
    restaurant_name: str
    delivery_address: str
    razorpay_order_id: str
    items: List[OrderItemDTO]


class OrderSummaryDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    status: OrderStatus
    restaurant_name: str
    pickup_address: str
    customer_name: str
    drop_address: str
    items: List[OrderItemDTO]
    total_items: int
    total_amount: Decimal
    order_date: datetime
    agent_name: Optional[str] = None


class OrderDetailDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    order_id: int
    order_status: OrderStatus
    total_amount: Decimal
    customer_name: str
    customer_address: str
    restaurant_name: str
    restaurant_address: str
    items: List[OrderItemDTO]
    available_agents: List[AgentDTO]
    agent_id: Optional[int] = None
    agent_name: Optional[str] = None
