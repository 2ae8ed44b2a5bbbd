"""Delivery agent directory (read side).

Lists agents for the admin console and for assignment, and resolves a
single agent's details.  The "current order" of an agent always comes
from one query, ``IOrderRepository.get_active_order_ids``, never from
the eagerly loaded order collection, which can lag behind in-flight
assignments.

"No agents" is a normal outcome: every listing returns an empty list
rather than raising.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List

import structlog

from modules.agents.constants import AgentStatus
from modules.agents.exceptions import AgentNotFound
from modules.agents.mappers import to_agent_view

if TYPE_CHECKING:
    from modules.agents.dtos import AgentDTO
    from modules.agents.models import DeliveryAgent
    from modules.agents.repositories.interfaces import IDeliveryAgentRepository
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


def deduplicate_agents(rows: List[DeliveryAgent]) -> List[DeliveryAgent]:
    """Collapse eager-join rows to one agent per id, keeping first-seen order.

    When duplicate rows disagree on status, the AVAILABLE-marked row wins.
    """
    by_id: Dict[int, DeliveryAgent] = {}
    for row in rows:
        if row.id is None:
            continue
        existing = by_id.get(row.id)
        if existing is None:
            by_id[row.id] = row
        elif row.status == AgentStatus.AVAILABLE and existing.status != AgentStatus.AVAILABLE:
            by_id[row.id] = row
    return list(by_id.values())


class DeliveryAgentService:
    """Application service for delivery agent queries."""

    def __init__(
        self,
        agent_repository: IDeliveryAgentRepository,
        order_repository: IOrderRepository,
    ) -> None:
        self._agent_repo = agent_repository
        self._order_repo = order_repository

    def find_available(self) -> List[AgentDTO]:
        """Return agents that can take an order right now (possibly none)."""
        agents = self._agent_repo.list_by_status(AgentStatus.AVAILABLE)
        logger.info("agents.available_listed", count=len(agents))
        return [to_agent_view(agent) for agent in agents]

    def find_all(self) -> List[AgentDTO]:
        """Return every agent once, with its current order overlaid."""
        rows = self._agent_repo.list_with_orders()
        agents = deduplicate_agents(rows)
        active = self._order_repo.get_active_order_ids([a.id for a in agents])
        logger.info(
            "agents.listed", row_count=len(rows), agent_count=len(agents)
        )
        return [to_agent_view(agent, active.get(agent.id)) for agent in agents]

    def get_agent_details(self, agent_id: int) -> AgentDTO:
        """Return one agent with its current order.

        Raises:
            AgentNotFound: the id does not resolve.
        """
        agent = self._agent_repo.get_by_id(agent_id)
        if agent is None:
            raise AgentNotFound(f"Delivery agent {agent_id} not found.")
        active = self._order_repo.get_active_order_ids([agent.id])
        return to_agent_view(agent, active.get(agent.id))
