"""Event handlers for Orders domain events."""

from __future__ import annotations

import structlog

from modules.orders.events import AgentAssigned, OrderDelivered, OrderPlaced
from shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class OrderPlacedHandler(IEventHandler[OrderPlaced]):
    def handle(self, event: OrderPlaced) -> None:
        logger.info(
            "order.event.placed",
            order_id=event.aggregate_id,
            event_id=str(event.event_id),
        )


class AgentAssignedHandler(IEventHandler[AgentAssigned]):
    def handle(self, event: AgentAssigned) -> None:
        logger.info(
            "order.event.agent_assigned",
            order_id=event.aggregate_id,
            agent_id=event.agent_id,
            event_id=str(event.event_id),
        )


class OrderDeliveredHandler(IEventHandler[OrderDelivered]):
    def handle(self, event: OrderDelivered) -> None:
        logger.info(
            "order.event.delivered",
            order_id=event.aggregate_id,
            agent_id=event.agent_id,
            event_id=str(event.event_id),
        )


order_placed_handler = OrderPlacedHandler()
agent_assigned_handler = AgentAssignedHandler()
order_delivered_handler = OrderDeliveredHandler()
