"""Operational metrics for the admin dashboard.

Counts and sums across customers, restaurants, agents and orders.  Each
figure is one repository call; nothing is cached or persisted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from modules.agents.constants import AgentStatus
from modules.dashboard.dtos import DashboardDTO
from modules.orders.constants import OrderStatus

if TYPE_CHECKING:
    from modules.agents.repositories.interfaces import IDeliveryAgentRepository
    from modules.catalog.repositories.interfaces import IRestaurantRepository
    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class DashboardService:
    def __init__(
        self,
        customer_repository: ICustomerRepository,
        restaurant_repository: IRestaurantRepository,
        agent_repository: IDeliveryAgentRepository,
        order_repository: IOrderRepository,
    ) -> None:
        self._customer_repo = customer_repository
        self._restaurant_repo = restaurant_repository
        self._agent_repo = agent_repository
        self._order_repo = order_repository

    def get_dashboard(self) -> DashboardDTO:
        """Return the current snapshot.

        ``total_revenue`` sums DELIVERED orders only and is zero, not
        ``None``, before the first delivery.
        """
        snapshot = DashboardDTO(
            total_customers=self._customer_repo.count(),
            total_restaurants=self._restaurant_repo.count(),
            total_delivery_agents=self._agent_repo.count(),
            total_orders=self._order_repo.count(),
            placed_orders=self._order_repo.count_by_status(OrderStatus.PLACED),
            delivered_orders=self._order_repo.count_by_status(OrderStatus.DELIVERED),
            total_available_agents=self._agent_repo.count_by_status(
                AgentStatus.AVAILABLE
            ),
            busy_agents=self._agent_repo.count_by_status(AgentStatus.BUSY),
            total_revenue=self._order_repo.sum_total_by_status(OrderStatus.DELIVERED),
        )
        logger.info("dashboard.computed", total_orders=snapshot.total_orders)
        return snapshot
