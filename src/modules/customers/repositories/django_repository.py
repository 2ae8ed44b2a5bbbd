"""Django ORM implementation of the Customer repository.

Error handling follows the Null Object pattern: methods return ``None``
instead of raising — the Service Layer decides how to translate a
missing entity into a domain error.
"""

from __future__ import annotations

from typing import Optional

from modules.customers.models import Customer
from modules.customers.repositories.interfaces import ICustomerRepository


class CustomerDjangoRepository(ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Customer]:
        return Customer.objects.filter(id=id).first()

    def count(self) -> int:
        return Customer.objects.count()

    def exists(self, id: int) -> bool:
        return Customer.objects.filter(id=id).exists()
