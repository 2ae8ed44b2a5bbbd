"""Order API views.

Exposes the ``OrderService`` via HTTP using a DRF ViewSet.
Domain exceptions are caught and translated into appropriate
HTTP status codes; the view never swallows generic exceptions.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.agents.exceptions import AgentNotFound
from modules.agents.repositories.django_repository import DeliveryAgentDjangoRepository
from modules.carts.repositories.django_repository import CartDjangoRepository
from modules.catalog.repositories.django_repository import (
    MenuItemDjangoRepository,
    RestaurantDjangoRepository,
)
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.orders.dtos import PlaceOrderDTO
from modules.orders.exceptions import (
    AssignmentConflict,
    CustomerNotFound,
    EmptyCart,
    InvalidOrderStatus,
    OrderNotFound,
    RestaurantNotFound,
)
from modules.orders.filters import OrderFilter
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import (
    AssignAgentSerializer,
    DeliverOrderSerializer,
    PlaceOrderSerializer,
)
from modules.orders.services import OrderService


def _dump(dtos) -> list:
    return [dto.model_dump(mode="json") for dto in dtos]


class OrderViewSet(ViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with injected repositories (DIP).
    All ORM access goes through the service/repository layer.
    """

    lookup_value_regex = r"\d+"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            customer_repository=CustomerDjangoRepository(),
            restaurant_repository=RestaurantDjangoRepository(),
            menu_item_repository=MenuItemDjangoRepository(),
            cart_repository=CartDjangoRepository(),
            agent_repository=DeliveryAgentDjangoRepository(),
        )

    # ------------------------------------------------------------------
    # Place
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/

        Places an order from the customer's current cart.
        """
        serializer = PlaceOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = PlaceOrderDTO(**serializer.validated_data)

        try:
            order = self._service.place_order(dto)
        except (CustomerNotFound, RestaurantNotFound) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        except EmptyCart as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(order.model_dump(mode="json"), status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/?status=PLACED"""
        filterset = OrderFilter(request.query_params, queryset=Order.objects.none())
        if not filterset.is_valid():
            return Response(filterset.errors, status=status.HTTP_400_BAD_REQUEST)

        filters = {
            name: value
            for name, value in filterset.form.cleaned_data.items()
            if value not in (None, "")
        }
        return Response(_dump(self._service.find_all_orders(filters)))

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        try:
            detail = self._service.get_order_details(int(pk))
        except (OrderNotFound, TypeError, ValueError):
            return Response(
                {"detail": "Order not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(detail.model_dump(mode="json"))

    @action(detail=False, methods=["get"], url_path=r"user/(?P<customer_id>\d+)")
    def history(self, request: Request, customer_id: str | None = None) -> Response:
        """GET /api/v1/orders/user/{customer_id}/

        204 when the customer has not ordered yet.
        """
        try:
            orders = self._service.get_orders_history(int(customer_id))
        except CustomerNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        if not orders:
            return Response(status=status.HTTP_204_NO_CONTENT)
        return Response(_dump(orders))

    # ------------------------------------------------------------------
    # Fulfillment
    # ------------------------------------------------------------------

    @action(detail=False, methods=["put"])
    def assign(self, request: Request) -> Response:
        """PUT /api/v1/orders/assign/"""
        serializer = AssignAgentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = self._service.assign_agent(
                order_id=serializer.validated_data["order_id"],
                agent_id=serializer.validated_data["agent_id"],
            )
        except (OrderNotFound, AgentNotFound) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        except AssignmentConflict as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response({"agent_name": order.agent.name})

    @action(detail=True, methods=["put"])
    def deliver(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/orders/{pk}/deliver/"""
        serializer = DeliverOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = self._service.deliver_order(
                order_id=int(pk),
                agent_id=serializer.validated_data.get("agent_id"),
            )
        except OrderNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidOrderStatus as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(
            {
                "order_status": order.status,
                "agent_status": order.agent.status if order.agent else None,
                "current_order_id": None,
            }
        )
