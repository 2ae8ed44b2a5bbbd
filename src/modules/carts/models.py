"""Cart and CartItem models.

A customer owns at most one cart, bound to a single restaurant.  Cart
editing (add / remove / update quantity) happens in a separate service;
here the cart is only read as a snapshot at placement time and emptied
once the order is persisted.

``menu_item_id`` is a plain integer rather than a foreign key: a menu
item can be withdrawn while it still sits in someone's cart, and
placement must cope with that (the line is dropped).
"""

from __future__ import annotations

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel


class Cart(BaseModel):
    customer: models.OneToOneField = models.OneToOneField(
        "customers.Customer",
        on_delete=models.CASCADE,
        related_name="cart",
    )
    restaurant: models.ForeignKey = models.ForeignKey(
        "catalog.Restaurant",
        on_delete=models.CASCADE,
        related_name="carts",
    )

    class Meta:
        db_table = "carts"

    def __str__(self) -> str:
        return f"Cart {self.id} (customer {self.customer_id})"


class CartItem(BaseModel):
    cart: models.ForeignKey = models.ForeignKey(
        "carts.Cart",
        on_delete=models.CASCADE,
        related_name="items",
    )
    menu_item_id = models.BigIntegerField()
    name = models.CharField(max_length=255)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
    )
    image_url = models.CharField(max_length=500, blank=True, default="")

    class Meta:
        db_table = "cart_items"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="cart_items_quantity_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} x{self.quantity}"
