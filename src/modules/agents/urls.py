"""Delivery agent URL configuration."""

from __future__ import annotations

from rest_framework.routers import SimpleRouter

from modules.agents.views import DeliveryAgentViewSet

router = SimpleRouter(trailing_slash=True)
router.register("agents", DeliveryAgentViewSet, basename="agent")

urlpatterns = router.urls
