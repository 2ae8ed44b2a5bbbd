"""Dashboard API view."""

from __future__ import annotations

from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.agents.repositories.django_repository import DeliveryAgentDjangoRepository
from modules.catalog.repositories.django_repository import RestaurantDjangoRepository
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.dashboard.services import DashboardService
from modules.orders.repositories.django_repository import OrderDjangoRepository


class DashboardView(APIView):
    def get(self, request: Request) -> Response:
        """GET /api/v1/dashboard/"""
        service = DashboardService(
            customer_repository=CustomerDjangoRepository(),
            restaurant_repository=RestaurantDjangoRepository(),
            agent_repository=DeliveryAgentDjangoRepository(),
            order_repository=OrderDjangoRepository(),
        )
        return Response(service.get_dashboard().model_dump(mode="json"))
