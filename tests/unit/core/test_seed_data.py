import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command

from modules.agents.models import DeliveryAgent
from modules.carts.models import Cart, CartItem
from modules.catalog.models import MenuItem, Restaurant
from modules.customers.models import Customer

pytestmark = pytest.mark.unit


def _counts():
    return (
        get_user_model().objects.count(),
        Customer.objects.count(),
        Restaurant.objects.count(),
        MenuItem.objects.count(),
        DeliveryAgent.objects.count(),
        Cart.objects.count(),
        CartItem.objects.count(),
    )


def test_seed_creates_placeable_carts():
    call_command("seed_data")

    assert Customer.objects.count() == 5
    assert DeliveryAgent.objects.filter(status="AVAILABLE").count() == 5
    for cart in Cart.objects.all():
        assert cart.items.exists()
        menu_ids = set(cart.restaurant.menu_items.values_list("id", flat=True))
        assert set(cart.items.values_list("menu_item_id", flat=True)) <= menu_ids


def test_seed_is_idempotent():
    call_command("seed_data")
    first = _counts()
    call_command("seed_data")
    assert _counts() == first
