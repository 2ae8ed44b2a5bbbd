"""Cart repository interface.

Only the two operations the fulfillment workflow calls into are part of
the contract: reading a snapshot and emptying the cart.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from modules.carts.dtos import CartSnapshotDTO


class ICartRepository(ABC):
    @abstractmethod
    def get_cart(self, customer_id: int) -> Optional[CartSnapshotDTO]:
        """Return the customer's cart snapshot, or ``None`` if there is no cart."""

    @abstractmethod
    def clear_cart(self, customer_id: int) -> None:
        """Remove every line from the customer's cart."""
