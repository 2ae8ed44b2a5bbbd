"""Unit tests for DashboardService."""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.agents.constants import AgentStatus
from modules.agents.repositories.django_repository import DeliveryAgentDjangoRepository
from modules.catalog.repositories.django_repository import RestaurantDjangoRepository
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.dashboard.services import DashboardService
from modules.orders.constants import OrderStatus
from modules.orders.repositories.django_repository import OrderDjangoRepository

pytestmark = pytest.mark.unit


@pytest.fixture()
def service():
    return DashboardService(
        customer_repository=CustomerDjangoRepository(),
        restaurant_repository=RestaurantDjangoRepository(),
        agent_repository=DeliveryAgentDjangoRepository(),
        order_repository=OrderDjangoRepository(),
    )


def test_empty_database(service):
    snapshot = service.get_dashboard()
    assert snapshot.total_orders == 0
    assert snapshot.total_customers == 0
    assert str(snapshot.total_revenue) == "0.00"


def test_revenue_is_zero_before_first_delivery(service, make_order):
    make_order(total_amount=Decimal("250.00"))
    assert str(service.get_dashboard().total_revenue) == "0.00"


def test_counts_and_revenue(service, make_order, make_agent, customer, restaurant):
    busy = make_agent(status=AgentStatus.BUSY)
    make_agent()
    make_agent()
    make_order(total_amount=Decimal("100.00"))
    make_order(
        total_amount=Decimal("40.00"),
        status=OrderStatus.OUT_FOR_DELIVERY,
        agent=busy,
    )
    make_order(total_amount=Decimal("100.00"), status=OrderStatus.DELIVERED)
    make_order(total_amount=Decimal("33.33"), status=OrderStatus.DELIVERED)

    snapshot = service.get_dashboard()

    assert snapshot.total_customers == 1
    assert snapshot.total_restaurants == 1
    assert snapshot.total_delivery_agents == 3
    assert snapshot.total_orders == 4
    assert snapshot.placed_orders == 1
    assert snapshot.delivered_orders == 2
    assert snapshot.total_available_agents == 2
    assert snapshot.busy_agents == 1
    assert str(snapshot.total_revenue) == "133.33"
