"""Pricing configuration schema.

The pricing document is supplied from outside the engine (a JSON file by
default, see ``data/pricing_repository.py``). Every model here is frozen so a
loaded configuration behaves as an immutable snapshot for the lifetime of a
quote.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

BaseFeeMode = Literal["added_to_subtotal", "floor_only"]


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class TrailerSpec(_FrozenModel):
    label: Optional[str] = None
    multiplier: float = Field(default=1.0, ge=0)
    volume_m2: Optional[float] = Field(default=None, ge=0)
    payload_kg: Optional[float] = Field(default=None, ge=0)


class HandlingRates(_FrozenModel):
    """Hourly handling tariff. All-zero defaults mean no handling is charged."""

    approach_min_hours: float = Field(default=0.0, ge=0)
    depart_min_hours: float = Field(default=0.0, ge=0)
    full_trailer_load_unload_hours: float = Field(default=0.0, ge=0)
    rate_per_hour: float = Field(default=0.0, ge=0)
    internal_load_unload_hours: float = Field(default=1.0, ge=0)
    external_load_unload_hours: float = Field(default=1.5, ge=0)


class KmLevy(_FrozenModel):
    eur_per_km: float = Field(default=0.12, ge=0)


class ZoneFee(_FrozenModel):
    flat: float = Field(default=0.0, ge=0)


class Accessorials(_FrozenModel):
    city_delivery: float = Field(default=0.0, ge=0)
    adr: float = Field(default=0.0, ge=0)
    waiting_per_hour: float = Field(default=0.0, ge=0)
    toll_per_km: float = Field(default=0.0, ge=0)


class PriceTier(_FrozenModel):
    max_km: float = Field(ge=0)
    price: float = Field(ge=0)


class FlatRateIncludes(_FrozenModel):
    """Which standard components are folded into a flat-rate quote."""

    min_fee: bool = False
    handling: bool = False
    fuel: bool = False
    km_levy: bool = False
    city_delivery: bool = False


class OnePalletPricing(_FrozenModel):
    grade: str = "one_pallet"
    max_fraction: float = Field(default=0.06, ge=0, le=1)
    tiers: List[PriceTier] = Field(default_factory=list)
    price_above: float = Field(default=0.0, ge=0)
    include: FlatRateIncludes = Field(default_factory=FlatRateIncludes)

    @field_validator("tiers", mode="before")
    @classmethod
    def _coerce_pairs(cls, value: Any) -> Any:
        # [[50, 110], [100, 160]] is accepted alongside {"max_km": .., "price": ..}
        if isinstance(value, list):
            return [
                {"max_km": item[0], "price": item[1]} if isinstance(item, (list, tuple)) else item
                for item in value
            ]
        return value

    @field_validator("tiers")
    @classmethod
    def _tiers_ascending(cls, value: List[PriceTier]) -> List[PriceTier]:
        for previous, current in zip(value, value[1:]):
            if current.max_km <= previous.max_km:
                raise ValueError(
                    f"one_pallet_pricing tiers must be sorted ascending by max_km "
                    f"({previous.max_km} is followed by {current.max_km})"
                )
        return value


class PricingConfig(_FrozenModel):
    """Complete tariff consumed by the rate engine."""

    min_fee: float = Field(default=0.0, ge=0)
    base_fee_mode: BaseFeeMode = "added_to_subtotal"
    eur_per_km_base: float = Field(
        default=0.0,
        ge=0,
        validation_alias=AliasChoices("eur_per_km_base", "distance_rate"),
    )
    fuel_pct: float = Field(default=0.0, ge=0)
    handling: HandlingRates = Field(default_factory=HandlingRates)
    crane_multiplier: float = Field(default=1.0, ge=0)
    km_levy: KmLevy = Field(default_factory=KmLevy)
    combined_discount_pct: float = Field(default=0.0, ge=0, le=1)
    load_grade_ratios: Dict[str, float] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("load_grade_ratios", "beladingsgraad"),
    )
    trailers: Dict[str, TrailerSpec] = Field(default_factory=dict)
    default_trailer_type: str = "tautliner"
    one_pallet_pricing: Optional[OnePalletPricing] = None
    zones: Dict[str, ZoneFee] = Field(default_factory=dict)
    default_zone: str = "NL"
    accessorials: Accessorials = Field(default_factory=Accessorials)
    currency: str = "EUR"

    @field_validator("load_grade_ratios")
    @classmethod
    def _ratios_in_unit_interval(cls, value: Dict[str, float]) -> Dict[str, float]:
        for grade, ratio in value.items():
            if not 0.0 <= ratio <= 1.0:
                raise ValueError(f"load grade '{grade}' ratio {ratio} is outside [0, 1]")
        return value

    @field_validator("zones", mode="before")
    @classmethod
    def _coerce_zone_numbers(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {
                code: {"flat": fee} if isinstance(fee, (int, float)) else fee
                for code, fee in value.items()
            }
        return value

    @model_validator(mode="after")
    def _default_trailer_known(self) -> "PricingConfig":
        if self.trailers and self.default_trailer_type not in self.trailers:
            raise ValueError(
                f"default_trailer_type '{self.default_trailer_type}' is not one of "
                f"{', '.join(sorted(self.trailers))}"
            )
        return self
