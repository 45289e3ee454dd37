"""Tariff lookup endpoints used to populate quote forms."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from ...data.pricing_repository import load_pricing_config
from ...exceptions import ConfigurationError
from ...schemas.quote import LoadGradeOption, PricingOptionsResponse, TrailerOption

router = APIRouter(prefix="/pricing", tags=["pricing"])


@router.get("/options", response_model=PricingOptionsResponse, status_code=status.HTTP_200_OK)
def pricing_options() -> PricingOptionsResponse:
    try:
        config = load_pricing_config()
    except ConfigurationError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=exc.message,
        ) from exc

    trailers = [
        TrailerOption(code=code, label=trailer.label or code, multiplier=trailer.multiplier)
        for code, trailer in config.trailers.items()
    ]
    grades = sorted(
        (LoadGradeOption(code=code, ratio=ratio) for code, ratio in config.load_grade_ratios.items()),
        key=lambda grade: grade.ratio,
    )
    return PricingOptionsResponse(
        trailers=trailers,
        default_trailer_type=config.default_trailer_type,
        load_grades=grades,
        zones=sorted(config.zones),
        default_zone=config.default_zone,
        currency=config.currency,
    )
