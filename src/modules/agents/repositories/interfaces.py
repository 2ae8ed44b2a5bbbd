"""Delivery agent repository interface.

Besides the generic look-ups, the assignment workflow needs a locked
read (``get_for_update``) and an atomic claim (``mark_busy``) so that
two administrators can never hand the same agent two orders.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Iterable, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.agents.constants import AgentStatus
    from modules.agents.models import DeliveryAgent


class IDeliveryAgentRepository(IRepository["DeliveryAgent"]):
    """Repository contract for the DeliveryAgent aggregate."""

    @abstractmethod
    def get_for_update(self, id: int) -> Optional[DeliveryAgent]:
        """Retrieve an agent holding a row-level lock until the transaction ends."""

    @abstractmethod
    def list_by_status(self, status: AgentStatus) -> List[DeliveryAgent]:
        """List agents currently in *status*."""

    @abstractmethod
    def count_by_status(self, status: AgentStatus) -> int:
        """Count agents currently in *status*."""

    @abstractmethod
    def list_with_orders(self) -> List[DeliveryAgent]:
        """List agents eagerly joined with their orders.

        The join yields one row per (agent, order) pair, so an agent with
        several orders appears several times.  Callers must deduplicate.
        """

    @abstractmethod
    def mark_busy(self, id: int) -> bool:
        """Atomically move an AVAILABLE agent to BUSY.

        Returns ``False`` when the agent was not AVAILABLE at write time.
        """

    @abstractmethod
    def save(
        self, entity: DeliveryAgent, update_fields: Optional[Iterable[str]] = None
    ) -> DeliveryAgent:
        """Persist an agent."""
