"""Routing provider integration."""

from .directions_client import DirectionsClient
from .models import RouteMetrics

__all__ = ["DirectionsClient", "RouteMetrics"]
