"""Route group exports."""

from . import health, pricing, quotes

__all__ = ["health", "pricing", "quotes"]
