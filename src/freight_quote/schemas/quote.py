"""Quote request/response schemas."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, model_validator


# Same coercion as the bool fields: "false", "0", "off" are False.
_FLAG = TypeAdapter(Optional[bool])


class LoadUnloadLocation(str, Enum):
    NONE = "none"
    INTERNAL = "internal"
    EXTERNAL = "external"


class QuoteOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    city_delivery: bool = False
    crane: bool = Field(default=False, validation_alias=AliasChoices("crane", "autolaad_kraan"))
    combined: bool = False
    km_levy: bool = False
    adr: bool = False
    toll: bool = False
    waiting_hours: float = Field(default=0.0, ge=0)
    load: bool = Field(default=False, description="Charge loading time when no location is selected.")
    unload: bool = Field(default=False, description="Charge unloading time when no location is selected.")
    load_unload_location: LoadUnloadLocation = LoadUnloadLocation.NONE
    zone: Optional[str] = None
    approach_hours: Optional[float] = Field(
        default=None,
        ge=0,
        description="Measured travel time from the depot to the pickup address, in hours.",
    )

    @model_validator(mode="before")
    @classmethod
    def _collapse_location_flags(cls, data: Any) -> Any:
        """Fold the legacy internal/external booleans into one location value.

        External wins over internal, internal wins over none.
        """
        if not isinstance(data, dict):
            return data
        data = dict(data)
        external = _FLAG.validate_python(data.pop("load_unload_external", None)) is True
        internal = _FLAG.validate_python(data.pop("load_unload_internal", None)) is True
        explicit = data.get("load_unload_location")
        if isinstance(explicit, LoadUnloadLocation):
            explicit = explicit.value
        if external or explicit == LoadUnloadLocation.EXTERNAL.value:
            data["load_unload_location"] = LoadUnloadLocation.EXTERNAL
        elif internal or explicit == LoadUnloadLocation.INTERNAL.value:
            data["load_unload_location"] = LoadUnloadLocation.INTERNAL
        return data


class QuoteRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    origin: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("from", "origin"),
        serialization_alias="from",
    )
    destination: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("to", "destination"),
        serialization_alias="to",
    )
    trailer_type: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("trailer_type", "trailerType")
    )
    load_grade: Optional[str] = Field(default=None, validation_alias=AliasChoices("load_grade", "loadGrade"))
    load_fraction: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("load_fraction", "loadFraction")
    )
    options: QuoteOptions = Field(default_factory=QuoteOptions)
    reference: Optional[str] = Field(default=None, description="Customer or order reference.")
    persist: Optional[bool] = Field(default=None, description="Override the server-side archiving setting.")

    @model_validator(mode="before")
    @classmethod
    def _lift_load_size_from_options(cls, data: Any) -> Any:
        # Older form clients send load_grade/load_fraction inside options.
        if not isinstance(data, dict):
            return data
        options = data.get("options")
        if not isinstance(options, dict):
            return data
        data = dict(data)
        for key, camel in (("load_grade", "loadGrade"), ("load_fraction", "loadFraction")):
            if data.get(key) is None and data.get(camel) is None and options.get(key) is not None:
                data[key] = options[key]
        return data


class QuoteResponse(BaseModel):
    inputs: Dict[str, Any]
    derived: Dict[str, Any]
    breakdown: Dict[str, float]
    total: float
    currency: str


class SummaryRow(BaseModel):
    key: str
    label: str
    amount: float


class QuoteSummaryResponse(BaseModel):
    reference: Optional[str] = None
    derived: Dict[str, Any]
    rows: List[SummaryRow]
    total: float
    currency: str


class TrailerOption(BaseModel):
    code: str
    label: str
    multiplier: float


class LoadGradeOption(BaseModel):
    code: str
    ratio: float


class PricingOptionsResponse(BaseModel):
    trailers: List[TrailerOption]
    default_trailer_type: str
    load_grades: List[LoadGradeOption]
    zones: List[str]
    default_zone: str
    currency: str
