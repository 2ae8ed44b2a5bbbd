"""Dashboard snapshot DTO (read-only, never persisted)."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class DashboardDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_customers: int
    total_restaurants: int
    total_delivery_agents: int
    total_orders: int
    placed_orders: int
    delivered_orders: int
    total_available_agents: int
    busy_agents: int
    total_revenue: Decimal
