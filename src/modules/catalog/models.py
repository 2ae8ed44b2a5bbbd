"""Restaurant and MenuItem models.

Menu management is handled elsewhere.  Order placement resolves the
restaurant of a cart and every menu item referenced by a cart line; the
item's current ``image_url`` is copied into the order line snapshot.
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models

from modules.core.models import BaseModel


class Restaurant(BaseModel):
    name = models.CharField(max_length=255)
    address = models.TextField(blank=True, default="")

    class Meta:
        db_table = "restaurants"
        ordering = ["id"]

    def __str__(self) -> str:
        return self.name


class MenuItem(BaseModel):
    restaurant: models.ForeignKey = models.ForeignKey(
        "catalog.Restaurant",
        on_delete=models.CASCADE,
        related_name="menu_items",
    )
    name = models.CharField(max_length=255)
    price = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00")
    )
    image_url = models.CharField(max_length=500, blank=True, default="")
    is_available = models.BooleanField(default=True)

    class Meta:
        db_table = "menu_items"
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.name} ({self.restaurant_id})"
