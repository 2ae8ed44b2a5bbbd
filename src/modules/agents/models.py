"""DeliveryAgent model.

Business rules implemented:
- An agent is BUSY while exactly one OUT_FOR_DELIVERY order references
  it, AVAILABLE otherwise.  The rule is maintained by the order workflow
  (assignment sets BUSY, delivery completion sets AVAILABLE); there is no
  database constraint for it.
- The agent's current order is never stored on the agent row.  It is
  looked up with ``IOrderRepository.get_active_order_ids``.
- Earnings, delivery count and rating may be unset (``NULL``) for agents
  onboarded by other tools; readers present them as zero.
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models

from modules.agents.constants import AgentStatus
from modules.core.models import BaseModel

ZERO = Decimal("0.00")


class DeliveryAgent(BaseModel):
    agent_code = models.CharField(max_length=50, blank=True, default="")
    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=254, blank=True, default="")
    phone = models.CharField(max_length=20, blank=True, default="")
    status = models.CharField(
        max_length=20,
        choices=AgentStatus.choices,
        default=AgentStatus.AVAILABLE,
    )
    total_deliveries = models.PositiveIntegerField(null=True, blank=True)
    total_earnings = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True
    )
    todays_earning = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True
    )
    rating = models.DecimalField(
        max_digits=3, decimal_places=2, null=True, blank=True
    )

    class Meta:
        db_table = "delivery_agents"
        ordering = ["id"]
        indexes = [
            models.Index(fields=["status"], name="agents_status_idx"),
        ]

    @property
    def is_available(self) -> bool:
        return self.status == AgentStatus.AVAILABLE

    def settle_delivery(self, commission: Decimal) -> None:
        """Credit *commission* for one completed delivery and free the agent."""
        self.total_earnings = (self.total_earnings or ZERO) + commission
        self.todays_earning = (self.todays_earning or ZERO) + commission
        self.total_deliveries = (self.total_deliveries or 0) + 1
        self.status = AgentStatus.AVAILABLE

    def __str__(self) -> str:
        return f"{self.name} ({self.status})"
