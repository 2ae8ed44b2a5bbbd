"""Immutable cart snapshot handed to order placement."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Tuple

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from modules.carts.models import Cart


class CartLineDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    menu_item_id: int
    name: str
    price: Decimal
    quantity: int = Field(ge=1)
    image_url: str = ""


class CartSnapshotDTO(BaseModel):
    """A customer's cart as it was when the order was placed."""

    model_config = ConfigDict(frozen=True)

    cart_id: int
    customer_id: int
    restaurant_id: int
    items: Tuple[CartLineDTO, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.items

    @classmethod
    def from_entity(cls, cart: Cart) -> CartSnapshotDTO:
        """Build a snapshot from a Cart with prefetched ``items``."""
        return cls(
            cart_id=cart.id,
            customer_id=cart.customer_id,
            restaurant_id=cart.restaurant_id,
            items=tuple(
                CartLineDTO(
                    menu_item_id=item.menu_item_id,
                    name=item.name,
                    price=item.price,
                    quantity=item.quantity,
                    image_url=item.image_url,
                )
                for item in cart.items.all()
            ),
        )
