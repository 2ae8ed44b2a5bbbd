"""Django ORM implementation of the DeliveryAgent repository."""

from __future__ import annotations

from typing import Iterable, List, Optional

import structlog
from django.utils import timezone

from modules.agents.constants import AgentStatus
from modules.agents.models import DeliveryAgent
from modules.agents.repositories.interfaces import IDeliveryAgentRepository

logger = structlog.get_logger(__name__)


class DeliveryAgentDjangoRepository(IDeliveryAgentRepository):
    """Concrete DeliveryAgent repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[DeliveryAgent]:
        return DeliveryAgent.objects.filter(id=id).first()

    def get_for_update(self, id: int) -> Optional[DeliveryAgent]:
        return DeliveryAgent.objects.select_for_update().filter(id=id).first()

    def count(self) -> int:
        return DeliveryAgent.objects.count()

    def list_by_status(self, status: AgentStatus) -> List[DeliveryAgent]:
        return list(DeliveryAgent.objects.filter(status=status))

    def count_by_status(self, status: AgentStatus) -> int:
        return DeliveryAgent.objects.filter(status=status).count()

    def list_with_orders(self) -> List[DeliveryAgent]:
        # Ordering across the reverse FK turns the query into a LEFT JOIN
        # on orders: one row per (agent, order) pair.
        return list(DeliveryAgent.objects.order_by("id", "orders__order_date"))

    def mark_busy(self, id: int) -> bool:
        updated = DeliveryAgent.objects.filter(
            id=id, status=AgentStatus.AVAILABLE
        ).update(status=AgentStatus.BUSY, updated_at=timezone.now())
        logger.info("agent.mark_busy", agent_id=id, claimed=bool(updated))
        return updated == 1

    def save(
        self, entity: DeliveryAgent, update_fields: Optional[Iterable[str]] = None
    ) -> DeliveryAgent:
        entity.save(update_fields=list(update_fields) if update_fields else None)
        logger.info("agent.saved", agent_id=entity.id, status=entity.status)
        return entity
