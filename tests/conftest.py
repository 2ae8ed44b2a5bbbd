from __future__ import annotations

from decimal import Decimal

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from modules.agents.constants import AgentStatus
from modules.agents.models import DeliveryAgent
from modules.agents.repositories.django_repository import DeliveryAgentDjangoRepository
from modules.carts.models import Cart, CartItem
from modules.carts.repositories.django_repository import CartDjangoRepository
from modules.catalog.models import MenuItem, Restaurant
from modules.catalog.repositories.django_repository import (
    MenuItemDjangoRepository,
    RestaurantDjangoRepository,
)
from modules.customers.models import Customer
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.orders.constants import OrderStatus
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def auth_client(api_client, django_user_model):
    """APIClient authenticated as an admin user."""
    user = django_user_model.objects.create_user(
        username="admin-console", password="not-used-in-tests"
    )
    api_client.force_authenticate(user=user)
    return api_client


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Domain fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def customer():
    return Customer.objects.create(
        name="Asha Rao",
        email="asha@example.com",
        phone="9810000000",
        address="14 Residency Road, Bengaluru",
    )


@pytest.fixture()
def restaurant():
    return Restaurant.objects.create(
        name="Spice Route", address="5 Brigade Road, Bengaluru"
    )


@pytest.fixture()
def menu_items(restaurant):
    return [
        MenuItem.objects.create(
            restaurant=restaurant,
            name="Paneer Tikka",
            price=Decimal("250.00"),
            image_url="/images/paneer-tikka.jpg",
        ),
        MenuItem.objects.create(
            restaurant=restaurant,
            name="Butter Naan",
            price=Decimal("50.00"),
            image_url="/images/butter-naan.jpg",
        ),
    ]


@pytest.fixture()
def make_cart():
    """Factory: ``make_cart(customer, restaurant, [(menu_item_or_id, qty), ...])``."""

    def _make(customer, restaurant, lines):
        cart, _ = Cart.objects.get_or_create(
            customer=customer, defaults={"restaurant": restaurant}
        )
        for item, quantity in lines:
            if isinstance(item, MenuItem):
                CartItem.objects.create(
                    cart=cart,
                    menu_item_id=item.id,
                    name=item.name,
                    price=item.price,
                    quantity=quantity,
                    image_url=item.image_url,
                )
            else:
                CartItem.objects.create(
                    cart=cart,
                    menu_item_id=item,
                    name="Withdrawn dish",
                    price=Decimal("99.00"),
                    quantity=quantity,
                )
        return cart

    return _make


@pytest.fixture()
def cart(customer, restaurant, menu_items, make_cart):
    return make_cart(customer, restaurant, [(menu_items[0], 2), (menu_items[1], 3)])


@pytest.fixture()
def make_agent():
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        data = {
            "agent_code": f"AG-{counter['n']:03d}",
            "name": f"Agent {counter['n']}",
            "email": f"agent{counter['n']}@example.com",
            "phone": "9820000000",
            "status": AgentStatus.AVAILABLE,
            "total_deliveries": 0,
            "total_earnings": Decimal("0.00"),
            "todays_earning": Decimal("0.00"),
            "rating": Decimal("4.50"),
        }
        data.update(overrides)
        return DeliveryAgent.objects.create(**data)

    return _make


@pytest.fixture()
def agent(make_agent):
    return make_agent(name="Ravi Kumar")


@pytest.fixture()
def make_order(customer, restaurant):
    """Factory for orders created directly, bypassing the cart."""

    def _make(
        total_amount=Decimal("100.00"),
        status=OrderStatus.PLACED,
        agent=None,
        order_customer=None,
    ):
        order_date = timezone.now()
        return Order.objects.create(
            customer=order_customer or customer,
            restaurant=restaurant,
            agent=agent,
            status=status,
            total_amount=total_amount,
            order_date=order_date,
            estimated_delivery=Order.estimate_delivery(order_date),
            delivery_address=customer.address,
        )

    return _make


@pytest.fixture()
def order_service():
    return OrderService(
        order_repository=OrderDjangoRepository(),
        customer_repository=CustomerDjangoRepository(),
        restaurant_repository=RestaurantDjangoRepository(),
        menu_item_repository=MenuItemDjangoRepository(),
        cart_repository=CartDjangoRepository(),
        agent_repository=DeliveryAgentDjangoRepository(),
    )
