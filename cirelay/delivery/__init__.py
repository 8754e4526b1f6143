"""Delivery adapters for pipeline run events."""

from __future__ import annotations

from .console import ConsoleDeliveryGateway
from .http import HttpDeliveryGateway
from .protocol import DeliveryGateway

__all__ = ["ConsoleDeliveryGateway", "DeliveryGateway", "HttpDeliveryGateway"]
