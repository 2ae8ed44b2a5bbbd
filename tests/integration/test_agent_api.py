"""Integration tests for /api/v1/agents/."""

from __future__ import annotations

import pytest

from modules.agents.constants import AgentStatus
from modules.orders.constants import OrderStatus

pytestmark = pytest.mark.integration

AGENTS_URL = "/api/v1/agents/"


class TestAgentEndpoints:
    def test_list_is_deduplicated(self, auth_client, agent, make_order):
        for _ in range(3):
            make_order(status=OrderStatus.DELIVERED, agent=agent)

        response = auth_client.get(AGENTS_URL)

        assert response.status_code == 200
        assert [a["id"] for a in response.json()] == [agent.id]

    def test_list_without_agents_is_empty(self, auth_client):
        response = auth_client.get(AGENTS_URL)
        assert response.status_code == 200
        assert response.json() == []

    def test_available(self, auth_client, make_agent):
        free = make_agent()
        make_agent(status=AgentStatus.BUSY)

        response = auth_client.get(f"{AGENTS_URL}available/")

        assert response.status_code == 200
        assert [a["id"] for a in response.json()] == [free.id]

    def test_none_available_is_200_empty(self, auth_client, make_agent):
        make_agent(status=AgentStatus.BUSY)
        response = auth_client.get(f"{AGENTS_URL}available/")
        assert response.status_code == 200
        assert response.json() == []

    def test_retrieve(self, auth_client, agent):
        response = auth_client.get(f"{AGENTS_URL}{agent.id}/")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Ravi Kumar"
        assert data["status"] == "AVAILABLE"
        assert data["today_earning"] == "0.00"

    def test_retrieve_unknown_is_404(self, auth_client):
        response = auth_client.get(f"{AGENTS_URL}999999/")
        assert response.status_code == 404
        assert response.json() == {"detail": "Delivery agent not found."}


class TestDashboardEndpoint:
    def test_snapshot(self, auth_client, customer, make_order):
        make_order()
        response = auth_client.get("/api/v1/dashboard/")
        assert response.status_code == 200
        data = response.json()
        assert data["total_orders"] == 1
        assert data["placed_orders"] == 1
        assert data["total_customers"] == 1
        assert data["total_revenue"] == "0.00"
