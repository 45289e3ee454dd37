"""Pricing engine: load ratio, handling and rate calculation."""

from .engine import quote
from .handling import compute_handling
from .load_ratio import resolve_load_ratio

__all__ = ["quote", "compute_handling", "resolve_load_ratio"]
