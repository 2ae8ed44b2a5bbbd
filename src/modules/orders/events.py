"""Domain events for the Orders bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from shared.domain.events import DomainEvent


@dataclass(frozen=True)
class OrderPlaced(DomainEvent):
    """Raised when an order is placed from a customer's cart."""


@dataclass(frozen=True)
class AgentAssigned(DomainEvent):
    """Raised when a delivery agent is bound to a placed order."""

    agent_id: Optional[int] = None


@dataclass(frozen=True)
class OrderDelivered(DomainEvent):
    """Raised when an order is marked delivered."""

    agent_id: Optional[int] = None
