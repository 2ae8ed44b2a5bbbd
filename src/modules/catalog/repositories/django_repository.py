"""Django ORM implementations of the catalog repositories."""

from __future__ import annotations

from typing import Optional

from modules.catalog.models import MenuItem, Restaurant
from modules.catalog.repositories.interfaces import (
    IMenuItemRepository,
    IRestaurantRepository,
)


class RestaurantDjangoRepository(IRestaurantRepository):
    def get_by_id(self, id: int) -> Optional[Restaurant]:
        return Restaurant.objects.filter(id=id).first()

    def count(self) -> int:
        return Restaurant.objects.count()


class MenuItemDjangoRepository(IMenuItemRepository):
    def get_by_id(self, id: int) -> Optional[MenuItem]:
        return MenuItem.objects.filter(id=id).first()

    def count(self) -> int:
        return MenuItem.objects.count()
