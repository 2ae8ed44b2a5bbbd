"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses: ``NotFound`` subclasses become 404,
``InvalidState`` subclasses become 400.
"""

from __future__ import annotations

from modules.core.exceptions import InvalidState, NotFound


class OrderNotFound(NotFound):
    """The requested order does not exist."""


class CustomerNotFound(NotFound):
    """The customer referenced by the request does not exist."""


class RestaurantNotFound(NotFound):
    """The restaurant of the customer's cart does not exist."""


class EmptyCart(InvalidState):
    """The cart is missing, empty, or none of its items still resolve."""


class InvalidOrderStatus(InvalidState):
    """The order is not in a status that allows the requested transition."""


class AssignmentConflict(InvalidState):
    """The order is not PLACED or the agent is not AVAILABLE."""
