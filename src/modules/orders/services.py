"""Order service layer (Use Cases).

Orchestrates the order fulfillment workflow: placement from a cart,
agent assignment, delivery completion and the read views used by
customers and the admin console.  All write operations are atomic:
the service defines the unit-of-work boundary.

Business rules enforced:
- Placement needs an existing customer and a non-empty cart whose
  restaurant and menu items still resolve.  The cart is emptied in the
  same transaction that creates the order.
- Assignment binds an AVAILABLE agent to a PLACED order.  Order row,
  then agent row, are locked; both claims are conditional updates so a
  concurrent assignment can never win twice.
- Delivery is only accepted from OUT_FOR_DELIVERY, so the agent's
  commission is credited exactly once.
- An agent is BUSY iff one OUT_FOR_DELIVERY order references it.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import transaction
from django.utils import timezone

from modules.agents.constants import AgentStatus
from modules.agents.exceptions import AgentNotFound
from modules.agents.mappers import to_agent_view
from modules.orders.constants import AGENT_COMMISSION_RATE, CENT, OrderStatus
from modules.orders.events import AgentAssigned, OrderDelivered, OrderPlaced
from modules.orders.exceptions import (
    AssignmentConflict,
    CustomerNotFound,
    EmptyCart,
    InvalidOrderStatus,
    OrderNotFound,
    RestaurantNotFound,
)
from modules.orders.mappers import to_order_detail, to_order_response, to_order_summary
from modules.orders.models import Order
from shared.infrastructure.bus import event_bus as default_event_bus

if TYPE_CHECKING:
    from modules.agents.repositories.interfaces import IDeliveryAgentRepository
    from modules.carts.repositories.interfaces import ICartRepository
    from modules.catalog.repositories.interfaces import (
        IMenuItemRepository,
        IRestaurantRepository,
    )
    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.orders.dtos import (
        OrderDetailDTO,
        OrderResponseDTO,
        OrderSummaryDTO,
        PlaceOrderDTO,
    )
    from modules.orders.repositories.interfaces import IOrderRepository
    from shared.domain.bus import IEventBus

logger = structlog.get_logger(__name__)


def calculate_commission(total_amount: Decimal) -> Decimal:
    """Agent commission for one delivery: 15% of the total, rounded half-up to cents."""
    return (Decimal(total_amount) * AGENT_COMMISSION_RATE).quantize(
        CENT, rounding=ROUND_HALF_UP
    )


class OrderService:
    """Application service for Order use-cases.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        customer_repository: ICustomerRepository,
        restaurant_repository: IRestaurantRepository,
        menu_item_repository: IMenuItemRepository,
        cart_repository: ICartRepository,
        agent_repository: IDeliveryAgentRepository,
        event_bus: Optional[IEventBus] = None,
    ) -> None:
        self._order_repo = order_repository
        self._customer_repo = customer_repository
        self._restaurant_repo = restaurant_repository
        self._menu_item_repo = menu_item_repository
        self._cart_repo = cart_repository
        self._agent_repo = agent_repository
        self._event_bus = event_bus or default_event_bus

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def place_order(self, dto: PlaceOrderDTO) -> OrderResponseDTO:
        """Turn the customer's cart into a PLACED order.

        Steps:
        1. Validate the customer exists.
        2. Read the cart snapshot; it must hold at least one line.
        3. Validate the cart's restaurant exists.
        4. Resolve each line's menu item, dropping lines that no longer
           resolve.
        5. Persist order + items, then empty the cart.

        Raises:
            CustomerNotFound: customer does not exist.
            EmptyCart: no cart, no lines, or no line still resolves.
            RestaurantNotFound: the cart's restaurant does not exist.
        """
        log = logger.bind(customer_id=dto.customer_id)
        log.info("order.placement_started")

        # 1. Validate customer
        customer = self._customer_repo.get_by_id(dto.customer_id)
        if customer is None:
            raise CustomerNotFound(f"Customer {dto.customer_id} not found.")

        # 2. Cart snapshot
        cart = self._cart_repo.get_cart(dto.customer_id)
        if cart is None or cart.is_empty:
            log.warning("order.cart_empty")
            raise EmptyCart(f"Cart of customer {dto.customer_id} is empty.")

        # 3. Validate restaurant
        restaurant = self._restaurant_repo.get_by_id(cart.restaurant_id)
        if restaurant is None:
            raise RestaurantNotFound(f"Restaurant {cart.restaurant_id} not found.")

        # 4. Resolve menu items; the line itself is the price snapshot
        repo_items = []
        for line in cart.items:
            menu_item = self._menu_item_repo.get_by_id(line.menu_item_id)
            if menu_item is None:
                log.warning("order.menu_item_skipped", menu_item_id=line.menu_item_id)
                continue
            repo_items.append(
                {
                    "menu_item_id": menu_item.id,
                    "name": line.name,
                    "price": line.price,
                    "quantity": line.quantity,
                    "image_url": line.image_url or menu_item.image_url,
                }
            )
        if not repo_items:
            raise EmptyCart(
                f"None of the items in the cart of customer {dto.customer_id} "
                "are still on the menu."
            )

        # 5. Persist order + items, then clear the cart
        order_date = timezone.now()
        order = self._order_repo.create(
            {
                "customer_id": customer.id,
                "restaurant_id": restaurant.id,
                "total_amount": dto.total_amount,
                "order_date": order_date,
                "estimated_delivery": Order.estimate_delivery(order_date),
                "delivery_address": dto.delivery_address,
                "razorpay_order_id": dto.razorpay_order_id,
                "razorpay_payment_id": dto.razorpay_payment_id,
                "razorpay_signature": dto.razorpay_signature,
                "items": repo_items,
            }
        )
        self._cart_repo.clear_cart(customer.id)

        log.info("order.placed", order_id=order.id, item_count=len(repo_items))
        self._event_bus.publish_on_commit(OrderPlaced(aggregate_id=order.id))

        # Re-fetch with relations for output
        return to_order_response(self._order_repo.get_by_id(order.id) or order)

    @transaction.atomic
    def assign_agent(self, order_id: int, agent_id: int) -> Order:
        """Bind an AVAILABLE agent to a PLACED order.

        Locks the order row before the agent row (fixed order, no
        deadlocks).  Both status changes are conditional updates; if
        either finds the row already moved on, the whole unit rolls back.

        Raises:
            OrderNotFound: order does not exist.
            AgentNotFound: agent does not exist.
            AssignmentConflict: order is not PLACED or agent is not AVAILABLE.
        """
        log = logger.bind(order_id=order_id, agent_id=agent_id)

        # 1. Lock order, then agent
        order = self._order_repo.get_for_update(order_id)
        if order is None:
            raise OrderNotFound(f"Order {order_id} not found.")
        agent = self._agent_repo.get_for_update(agent_id)
        if agent is None:
            raise AgentNotFound(f"Delivery agent {agent_id} not found.")

        # 2. Preconditions on the locked rows
        if not order.can_transition_to(OrderStatus.OUT_FOR_DELIVERY):
            log.warning("order.assign_rejected", order_status=order.status)
            raise AssignmentConflict(
                f"Order {order_id} is {order.status}; only PLACED orders can be assigned."
            )
        if not agent.is_available:
            log.warning("order.assign_rejected", agent_status=agent.status)
            raise AssignmentConflict(f"Delivery agent {agent_id} is not available.")

        # 3. Conditional claims
        if not self._agent_repo.mark_busy(agent.id):
            log.warning("order.assign_lost_agent_claim")
            raise AssignmentConflict(f"Delivery agent {agent_id} is not available.")
        if not self._order_repo.claim_for_delivery(order.id, agent.id):
            log.warning("order.assign_lost_order_claim")
            raise AssignmentConflict(f"Order {order_id} is no longer PLACED.")

        log.info("order.agent_assigned")
        self._event_bus.publish_on_commit(
            AgentAssigned(aggregate_id=order.id, agent_id=agent.id)
        )
        return self._order_repo.get_by_id(order.id)

    @transaction.atomic
    def deliver_order(self, order_id: int, agent_id: Optional[int] = None) -> Order:
        """Mark an OUT_FOR_DELIVERY order as DELIVERED and settle its agent.

        The agent linked to the order earns ``calculate_commission(total)``,
        one more delivery, and becomes AVAILABLE again.

        Raises:
            OrderNotFound: order does not exist.
            InvalidOrderStatus: order is not OUT_FOR_DELIVERY.
        """
        order = self._order_repo.get_for_update(order_id)
        if order is None:
            raise OrderNotFound(f"Order {order_id} not found.")

        log = logger.bind(order_id=order_id, current_status=order.status)

        if not order.can_transition_to(OrderStatus.DELIVERED):
            log.warning("order.invalid_transition", new_status=OrderStatus.DELIVERED)
            raise InvalidOrderStatus(
                f"Cannot transition from {order.status} to {OrderStatus.DELIVERED}."
            )

        order.status = OrderStatus.DELIVERED
        self._order_repo.save(order, update_fields=["status"])

        linked_agent_id = order.agent_id
        if agent_id is not None and agent_id != linked_agent_id:
            log.warning(
                "order.delivery_agent_mismatch",
                requested_agent_id=agent_id,
                linked_agent_id=linked_agent_id,
            )

        agent = (
            self._agent_repo.get_for_update(linked_agent_id)
            if linked_agent_id is not None
            else None
        )
        if agent is None:
            log.warning("order.delivered_without_agent")
        else:
            commission = calculate_commission(order.total_amount)
            agent.settle_delivery(commission)
            self._agent_repo.save(
                agent,
                update_fields=[
                    "status",
                    "total_earnings",
                    "todays_earning",
                    "total_deliveries",
                ],
            )
            log.info(
                "order.agent_settled",
                agent_id=agent.id,
                commission=str(commission),
                agent_status=agent.status,
            )

        log.info("order.delivered")
        self._event_bus.publish_on_commit(
            OrderDelivered(aggregate_id=order.id, agent_id=linked_agent_id)
        )
        return self._order_repo.get_by_id(order.id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_orders_history(self, customer_id: int) -> List[OrderResponseDTO]:
        """Return a customer's orders, newest first (possibly none).

        Raises:
            CustomerNotFound: customer does not exist.
        """
        if not self._customer_repo.exists(customer_id):
            raise CustomerNotFound(f"Customer {customer_id} not found.")
        orders = self._order_repo.list_for_customer(customer_id)
        return [to_order_response(order) for order in orders]

    def find_all_orders(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> List[OrderSummaryDTO]:
        """Return every order, optionally filtered (e.g. by ``status``)."""
        orders = self._order_repo.list(filters)
        logger.info("order.listed", count=len(orders), filters=filters or {})
        return [to_order_summary(order) for order in orders]

    def get_order_details(self, order_id: int) -> OrderDetailDTO:
        """Return one order plus the agents it could be assigned to.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(f"Order {order_id} not found.")
        candidates = [
            to_agent_view(agent)
            for agent in self._agent_repo.list_by_status(AgentStatus.AVAILABLE)
        ]
        return to_order_detail(order, candidates)
