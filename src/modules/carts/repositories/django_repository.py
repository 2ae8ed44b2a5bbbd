"""Django ORM implementation of the Cart repository."""

from __future__ import annotations

from typing import Optional

import structlog

from modules.carts.dtos import CartSnapshotDTO
from modules.carts.models import Cart, CartItem
from modules.carts.repositories.interfaces import ICartRepository

logger = structlog.get_logger(__name__)


class CartDjangoRepository(ICartRepository):
    """Concrete Cart repository backed by Django ORM."""

    def get_cart(self, customer_id: int) -> Optional[CartSnapshotDTO]:
        cart = (
            Cart.objects.prefetch_related("items")
            .filter(customer_id=customer_id)
            .first()
        )
        if cart is None:
            return None
        return CartSnapshotDTO.from_entity(cart)

    def clear_cart(self, customer_id: int) -> None:
        deleted, _ = CartItem.objects.filter(cart__customer_id=customer_id).delete()
        logger.info("cart.cleared", customer_id=customer_id, removed_items=deleted)
