"""Customer model.

Customer registration and profile management live outside this service;
the fulfillment workflow only needs to resolve a customer by id and read
its name and address for presentation.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class Customer(BaseModel):
    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=254, unique=True)
    phone = models.CharField(max_length=20, blank=True, default="")
    address = models.TextField(blank=True, default="")

    class Meta:
        db_table = "customers"
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"
