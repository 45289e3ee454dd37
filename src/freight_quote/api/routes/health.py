"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


def _get_directions_health_check():
    """Lazy import to avoid startup failures."""
    from ...services.routing.directions_client import check_health as directions_health_check
    return directions_health_check


@router.get("/health/directions", status_code=status.HTTP_200_OK)
def health_directions() -> dict:
    """Check that the directions provider answers."""
    try:
        directions_health_check = _get_directions_health_check()
        return {"service": "directions", "healthy": directions_health_check()}
    except Exception as e:
        return {"service": "directions", "healthy": False, "error": str(e)}


@router.get("/health/pricing", status_code=status.HTTP_200_OK)
def health_pricing() -> dict:
    """Check that the pricing configuration loads and validates."""
    from ...data.pricing_repository import load_pricing_config
    from ...exceptions import ConfigurationError

    try:
        config = load_pricing_config()
    except ConfigurationError as exc:
        return {"service": "pricing", "healthy": False, "error": exc.message}
    return {
        "service": "pricing",
        "healthy": True,
        "trailers": len(config.trailers),
        "zones": len(config.zones),
        "flat_rate_tiers": len(config.one_pallet_pricing.tiers) if config.one_pallet_pricing else 0,
    }
