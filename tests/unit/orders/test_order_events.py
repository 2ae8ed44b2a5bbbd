"""Order domain events are published only after the transaction commits."""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.agents.repositories.django_repository import DeliveryAgentDjangoRepository
from modules.carts.repositories.django_repository import CartDjangoRepository
from modules.catalog.repositories.django_repository import (
    MenuItemDjangoRepository,
    RestaurantDjangoRepository,
)
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.orders.events import AgentAssigned, OrderDelivered, OrderPlaced
from modules.orders.dtos import PlaceOrderDTO
from modules.orders.exceptions import EmptyCart
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from shared.infrastructure.bus import InMemoryEventBus

pytestmark = pytest.mark.unit


class RecordingHandler:
    def __init__(self):
        self.events = []

    def handle(self, event):
        self.events.append(event)


@pytest.fixture()
def recorder():
    return RecordingHandler()


@pytest.fixture()
def service(recorder):
    bus = InMemoryEventBus()
    for event_class in (OrderPlaced, AgentAssigned, OrderDelivered):
        bus.subscribe(event_class, recorder)
    return OrderService(
        order_repository=OrderDjangoRepository(),
        customer_repository=CustomerDjangoRepository(),
        restaurant_repository=RestaurantDjangoRepository(),
        menu_item_repository=MenuItemDjangoRepository(),
        cart_repository=CartDjangoRepository(),
        agent_repository=DeliveryAgentDjangoRepository(),
        event_bus=bus,
    )


def test_lifecycle_events_in_order(
    service, recorder, customer, cart, agent, django_capture_on_commit_callbacks
):
    with django_capture_on_commit_callbacks(execute=True):
        placed = service.place_order(
            PlaceOrderDTO(customer_id=customer.id, total_amount=Decimal("100.00"))
        )
    with django_capture_on_commit_callbacks(execute=True):
        service.assign_agent(placed.order_id, agent.id)
    with django_capture_on_commit_callbacks(execute=True):
        service.deliver_order(placed.order_id, agent.id)

    assert [e.event_name for e in recorder.events] == [
        "OrderPlaced",
        "AgentAssigned",
        "OrderDelivered",
    ]
    assert {e.aggregate_id for e in recorder.events} == {placed.order_id}
    assert recorder.events[1].agent_id == agent.id


def test_nothing_published_before_commit(service, recorder, customer, cart):
    service.place_order(
        PlaceOrderDTO(customer_id=customer.id, total_amount=Decimal("100.00"))
    )
    assert recorder.events == []


def test_failed_placement_publishes_nothing(
    service, recorder, customer, django_capture_on_commit_callbacks
):
    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        with pytest.raises(EmptyCart):
            service.place_order(
                PlaceOrderDTO(customer_id=customer.id, total_amount=Decimal("1.00"))
            )
    assert callbacks == []
    assert recorder.events == []
