"""Pure translation from persisted orders to response DTOs.

The functions expect ``customer``, ``restaurant`` and ``agent`` to be
select-related and ``items`` to be prefetched (see
``OrderDjangoRepository.get_by_id``); they never query on their own
beyond what Django's relation cache already holds.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from modules.agents.dtos import AgentDTO
from modules.orders.dtos import (
    OrderDetailDTO,
    OrderItemDTO,
    OrderResponseDTO,
    OrderSummaryDTO,
)
from modules.orders.models import Order, OrderItem


def to_order_items(items: Iterable[OrderItem]) -> List[OrderItemDTO]:
    return [
        OrderItemDTO(
            name=item.name,
            price=item.price,
            quantity=item.quantity,
            image_url=item.image_url,
        )
        for item in items
    ]


def to_order_response(order: Order) -> OrderResponseDTO:
    return OrderResponseDTO(
        order_id=order.id,
        status=order.status,
        total_amount=order.total_amount,
        order_date=order.order_date,
        estimated_delivery=order.estimated_delivery,
        restaurant_name=order.restaurant.name,
        delivery_address=order.delivery_address,
        razorpay_order_id=order.razorpay_order_id,
        items=to_order_items(order.items.all()),
    )


def to_order_summary(order: Order) -> OrderSummaryDTO:
    items = to_order_items(order.items.all())
    return OrderSummaryDTO(
        id=order.id,
        status=order.status,
        restaurant_name=order.restaurant.name,
        pickup_address=order.restaurant.address,
        customer_name=order.customer.name,
        drop_address=order.delivery_address or order.customer.address,
        items=items,
        total_items=len(items),
        total_amount=order.total_amount,
        order_date=order.order_date,
        agent_name=order.agent.name if order.agent else None,
    )


def to_order_detail(
    order: Order, available_agents: Sequence[AgentDTO]
) -> OrderDetailDTO:
    return OrderDetailDTO(
        order_id=order.id,
        order_status=order.status,
        total_amount=order.total_amount,
        customer_name=order.customer.name,
        customer_address=order.delivery_address or order.customer.address,
        restaurant_name=order.restaurant.name,
        restaurant_address=order.restaurant.address,
        items=to_order_items(order.items.all()),
        available_agents=list(available_agents),
        agent_id=order.agent_id,
        agent_name=order.agent.name if order.agent else None,
    )
