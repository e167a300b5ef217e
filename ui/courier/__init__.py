"""Courier-facing delivery window."""

from .delivery_page import DeliveryWindow

__all__ = ["DeliveryWindow"]
