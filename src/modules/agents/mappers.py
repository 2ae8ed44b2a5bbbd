"""Pure translation from ``DeliveryAgent`` rows to ``AgentDTO``."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from modules.agents.dtos import AgentDTO
from modules.agents.models import DeliveryAgent

ZERO = Decimal("0.00")


def to_agent_view(
    agent: DeliveryAgent, current_order_id: Optional[int] = None
) -> AgentDTO:
    return AgentDTO(
        id=agent.id,
        agent_code=agent.agent_code or str(agent.id),
        name=agent.name,
        phone=agent.phone,
        email=agent.email,
        status=agent.status,
        current_order_id=current_order_id,
        today_earning=agent.todays_earning if agent.todays_earning is not None else ZERO,
        total_earning=agent.total_earnings if agent.total_earnings is not None else ZERO,
        total_deliveries=agent.total_deliveries or 0,
        rating=agent.rating if agent.rating is not None else ZERO,
    )
