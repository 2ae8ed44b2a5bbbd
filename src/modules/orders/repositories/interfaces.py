"""Order repository interface.

Extends ``IRepository[Order]`` with what the fulfillment workflow
needs: atomic creation with items, a locked read for state changes,
conditional status claims, per-customer history, status aggregates and
the single authoritative "active order per agent" look-up.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.constants import OrderStatus
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The Order aggregate includes its OrderItem children.  Mutations must
    be atomic.
    """

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order with its items atomically.

        ``data`` must include ``customer_id``, ``restaurant_id``,
        ``total_amount``, ``order_date``, ``estimated_delivery`` and
        ``items`` (list of dicts with ``menu_item_id``, ``name``,
        ``price``, ``quantity``, ``image_url``).
        """

    @abstractmethod
    def get_by_id(self, id: int) -> Optional[Order]:
        """Retrieve an order with customer, restaurant, agent and items loaded."""

    @abstractmethod
    def get_for_update(self, id: int) -> Optional[Order]:
        """Retrieve an order holding a row-level lock until the transaction ends."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """List orders (newest first) with optional filters, relations loaded."""

    @abstractmethod
    def list_for_customer(self, customer_id: int) -> List[Order]:
        """List a customer's orders, newest first."""

    @abstractmethod
    def count_by_status(self, status: OrderStatus) -> int:
        """Count orders currently in *status*."""

    @abstractmethod
    def sum_total_by_status(self, status: OrderStatus) -> Decimal:
        """Sum ``total_amount`` over orders in *status*; zero when there are none."""

    @abstractmethod
    def get_active_order_ids(self, agent_ids: Iterable[int]) -> Dict[int, int]:
        """Map agent id -> id of the OUT_FOR_DELIVERY order referencing it.

        Agents without an active order are absent from the result.
        """

    @abstractmethod
    def claim_for_delivery(self, id: int, agent_id: int) -> bool:
        """Atomically bind *agent_id* to a PLACED order and mark it OUT_FOR_DELIVERY.

        Returns ``False`` when the order was not PLACED at write time.
        """

    @abstractmethod
    def save(
        self, entity: Order, update_fields: Optional[Iterable[str]] = None
    ) -> Order:
        """Persist an order."""
