"""Assignment concurrency integration test.

Proves that the order/agent locks plus the conditional claims in
``OrderService.assign_agent`` let exactly one of two concurrent
assignments win.

Scenarios:
- Two administrators assign *different* agents to the *same* order.
- Two administrators assign the *same* agent to *different* orders.

Uses a transactional test so each worker thread sees committed data on
its own connection.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

import django
import pytest

from modules.agents.constants import AgentStatus
from modules.agents.repositories.django_repository import DeliveryAgentDjangoRepository
from modules.carts.repositories.django_repository import CartDjangoRepository
from modules.catalog.repositories.django_repository import (
    MenuItemDjangoRepository,
    RestaurantDjangoRepository,
)
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.orders.constants import OrderStatus
from modules.orders.exceptions import AssignmentConflict
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService

pytestmark = [pytest.mark.integration, pytest.mark.django_db(transaction=True)]

NUM_WORKERS = 2


def _service() -> OrderService:
    return OrderService(
        order_repository=OrderDjangoRepository(),
        customer_repository=CustomerDjangoRepository(),
        restaurant_repository=RestaurantDjangoRepository(),
        menu_item_repository=MenuItemDjangoRepository(),
        cart_repository=CartDjangoRepository(),
        agent_repository=DeliveryAgentDjangoRepository(),
    )


def _run_concurrently(pairs):
    """Run ``assign_agent(order_id, agent_id)`` for each pair at the same time.

    Returns one of ``"assigned"`` / ``"conflict"`` per pair, in input order.
    """
    barrier = threading.Barrier(len(pairs))

    def _assign(order_id: int, agent_id: int) -> str:
        django.db.connections.close_all()
        try:
            barrier.wait(timeout=10)
            _service().assign_agent(order_id, agent_id)
            return "assigned"
        except AssignmentConflict:
            return "conflict"
        finally:
            django.db.connections.close_all()

    with ThreadPoolExecutor(max_workers=len(pairs)) as pool:
        futures = [pool.submit(_assign, order_id, agent_id) for order_id, agent_id in pairs]
        return [future.result() for future in futures]


def test_two_agents_race_for_one_order(make_order, make_agent):
    order = make_order()
    agents = [make_agent() for _ in range(NUM_WORKERS)]

    results = _run_concurrently([(order.id, agent.id) for agent in agents])

    assert sorted(results) == ["assigned", "conflict"]
    winner = agents[results.index("assigned")]
    loser = agents[results.index("conflict")]

    order.refresh_from_db()
    winner.refresh_from_db()
    loser.refresh_from_db()
    assert order.status == OrderStatus.OUT_FOR_DELIVERY
    assert order.agent_id == winner.id
    assert winner.status == AgentStatus.BUSY
    assert loser.status == AgentStatus.AVAILABLE


def test_one_agent_raced_onto_two_orders(make_order, agent):
    orders = [make_order() for _ in range(NUM_WORKERS)]

    results = _run_concurrently([(order.id, agent.id) for order in orders])

    assert sorted(results) == ["assigned", "conflict"]
    agent.refresh_from_db()
    assert agent.status == AgentStatus.BUSY
    assert (
        Order.objects.filter(agent=agent, status=OrderStatus.OUT_FOR_DELIVERY).count()
        == 1
    )
    assert Order.objects.filter(status=OrderStatus.PLACED, agent__isnull=True).count() == 1
