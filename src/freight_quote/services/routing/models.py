"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class RouteMetrics:
    distance_km: int
    duration_hours: float

    def __post_init__(self) -> None:
        if self.distance_km < 1:
            raise ValueError(f"distance_km must be at least 1, got {self.distance_km}")
        if self.duration_hours < 0:
            raise ValueError(f"duration_hours must not be negative, got {self.duration_hours}")
