"""Delivery agent API views (read-only)."""

from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.agents.exceptions import AgentNotFound
from modules.agents.repositories.django_repository import DeliveryAgentDjangoRepository
from modules.agents.services import DeliveryAgentService
from modules.orders.repositories.django_repository import OrderDjangoRepository


class DeliveryAgentViewSet(ViewSet):
    """List, filter by availability, and inspect delivery agents."""

    lookup_value_regex = r"\d+"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = DeliveryAgentService(
            agent_repository=DeliveryAgentDjangoRepository(),
            order_repository=OrderDjangoRepository(),
        )

    def list(self, request: Request) -> Response:
        """GET /api/v1/agents/"""
        agents = self._service.find_all()
        return Response([agent.model_dump(mode="json") for agent in agents])

    @action(detail=False, methods=["get"])
    def available(self, request: Request) -> Response:
        """GET /api/v1/agents/available/

        An empty list is a normal answer (200), not a missing resource.
        """
        agents = self._service.find_available()
        return Response([agent.model_dump(mode="json") for agent in agents])

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/agents/{pk}/"""
        try:
            agent = self._service.get_agent_details(int(pk))
        except (AgentNotFound, TypeError, ValueError):
            return Response(
                {"detail": "Delivery agent not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(agent.model_dump(mode="json"))
