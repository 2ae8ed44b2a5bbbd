"""Unit tests for DeliveryAgentService and the agent mapper."""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.agents.constants import AgentStatus
from modules.agents.exceptions import AgentNotFound
from modules.agents.mappers import to_agent_view
from modules.agents.models import DeliveryAgent
from modules.agents.repositories.django_repository import DeliveryAgentDjangoRepository
from modules.agents.services import DeliveryAgentService, deduplicate_agents
from modules.orders.constants import OrderStatus
from modules.orders.repositories.django_repository import OrderDjangoRepository

pytestmark = pytest.mark.unit


@pytest.fixture()
def service():
    return DeliveryAgentService(
        agent_repository=DeliveryAgentDjangoRepository(),
        order_repository=OrderDjangoRepository(),
    )


class TestDeduplicateAgents:
    def test_keeps_first_seen_order(self):
        a = DeliveryAgent(id=2, name="A", status=AgentStatus.AVAILABLE)
        b = DeliveryAgent(id=1, name="B", status=AgentStatus.AVAILABLE)
        result = deduplicate_agents([a, b, DeliveryAgent(id=2, name="A")])
        assert [agent.id for agent in result] == [2, 1]

    def test_prefers_available_row_on_disagreement(self):
        busy = DeliveryAgent(id=7, name="Stale", status=AgentStatus.BUSY)
        available = DeliveryAgent(id=7, name="Fresh", status=AgentStatus.AVAILABLE)
        (result,) = deduplicate_agents([busy, available])
        assert result.name == "Fresh"

    def test_available_row_is_not_replaced_by_busy_duplicate(self):
        available = DeliveryAgent(id=7, name="Fresh", status=AgentStatus.AVAILABLE)
        busy = DeliveryAgent(id=7, name="Stale", status=AgentStatus.BUSY)
        (result,) = deduplicate_agents([available, busy])
        assert result.name == "Fresh"

    def test_empty(self):
        assert deduplicate_agents([]) == []


class TestFindAll:
    def test_each_agent_once_despite_many_orders(self, service, make_agent, make_order):
        veteran = make_agent(name="Veteran")
        rookie = make_agent(name="Rookie")
        for _ in range(3):
            make_order(status=OrderStatus.DELIVERED, agent=veteran)

        agents = service.find_all()

        assert [a.id for a in agents] == [veteran.id, rookie.id]

    def test_overlays_current_order(self, service, make_agent, make_order):
        busy = make_agent(status=AgentStatus.BUSY)
        idle = make_agent()
        make_order(status=OrderStatus.DELIVERED, agent=busy)
        active = make_order(status=OrderStatus.OUT_FOR_DELIVERY, agent=busy)

        by_id = {a.id: a for a in service.find_all()}

        assert by_id[busy.id].current_order_id == active.id
        assert by_id[idle.id].current_order_id is None

    def test_no_agents_is_an_empty_list(self, service):
        assert service.find_all() == []


class TestFindAvailable:
    def test_only_available_agents(self, service, make_agent):
        free = make_agent()
        make_agent(status=AgentStatus.BUSY)
        assert [a.id for a in service.find_available()] == [free.id]

    def test_none_available_is_an_empty_list(self, service, make_agent):
        make_agent(status=AgentStatus.BUSY)
        assert service.find_available() == []


class TestGetAgentDetails:
    def test_returns_agent_with_current_order(self, service, make_agent, make_order):
        agent = make_agent(status=AgentStatus.BUSY)
        order = make_order(status=OrderStatus.OUT_FOR_DELIVERY, agent=agent)

        dto = service.get_agent_details(agent.id)

        assert dto.id == agent.id
        assert dto.status == AgentStatus.BUSY
        assert dto.current_order_id == order.id

    def test_unknown_agent_raises(self, service):
        with pytest.raises(AgentNotFound):
            service.get_agent_details(999999)


class TestAgentMapper:
    def test_unset_numbers_become_zero(self, make_agent):
        agent = make_agent(
            agent_code="",
            total_deliveries=None,
            total_earnings=None,
            todays_earning=None,
            rating=None,
        )

        dto = to_agent_view(agent)

        assert dto.agent_code == str(agent.id)
        assert dto.total_deliveries == 0
        assert dto.total_earning == Decimal("0")
        assert dto.today_earning == Decimal("0")
        assert dto.rating == Decimal("0")
        assert dto.current_order_id is None

    def test_copies_figures(self, make_agent):
        agent = make_agent(total_deliveries=4, total_earnings=Decimal("60.00"))
        dto = to_agent_view(agent, current_order_id=9)
        assert dto.total_deliveries == 4
        assert dto.total_earning == Decimal("60.00")
        assert dto.current_order_id == 9
