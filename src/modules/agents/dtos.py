"""Delivery agent output DTO (Pydantic v2, immutable)."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict

from modules.agents.constants import AgentStatus


class AgentDTO(BaseModel):
    """Agent as presented to the admin console.

    Numeric fields are never ``None``; ``current_order_id`` is ``None``
    when the agent has no order out for delivery.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    agent_code: str
    name: str
    phone: str
    email: str
    status: AgentStatus
    current_order_id: Optional[int] = None
    today_earning: Decimal
    total_earning: Decimal
    total_deliveries: int
    rating: Decimal
