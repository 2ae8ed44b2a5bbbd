"""Delivery agent domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import NotFound


class AgentNotFound(NotFound):
    """The requested delivery agent does not exist."""
