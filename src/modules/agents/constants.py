"""Delivery agent domain constants."""

from django.db import models


class AgentStatus(models.TextChoices):
    AVAILABLE = "AVAILABLE", "Available"
    BUSY = "BUSY", "Busy"
