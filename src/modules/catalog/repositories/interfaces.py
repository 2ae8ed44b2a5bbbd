"""Catalog repository interfaces (restaurants and menu items)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.catalog.models import MenuItem, Restaurant


class IRestaurantRepository(IRepository["Restaurant"]):
    """Repository contract for restaurants."""


class IMenuItemRepository(IRepository["MenuItem"]):
    """Repository contract for menu items."""
