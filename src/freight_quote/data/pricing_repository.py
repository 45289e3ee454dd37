"""Pricing configuration loader.

This is the only place where the tariff is read from disk. The rate engine
receives the validated ``PricingConfig`` produced here and never falls back to
defaults on its own.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path

from pydantic import ValidationError

from ..config import settings
from ..exceptions import ConfigurationError
from ..schemas.pricing import PricingConfig

logger = logging.getLogger(__name__)

DEFAULT_PRICING_FILE = Path(__file__).with_name("default_pricing.json")


def parse_pricing_config(raw: dict, source: str = "<memory>") -> PricingConfig:
    try:
        return PricingConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid pricing configuration in {source}: {exc}") from exc


def _read_pricing_file(path: Path) -> PricingConfig:
    try:
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Pricing file '{path}' is not valid JSON: {exc}") from exc
    except OSError as exc:
        raise ConfigurationError(f"Pricing file '{path}' could not be read: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Pricing file '{path}' must contain a JSON object.")
    return parse_pricing_config(raw, source=str(path))


def load_default_pricing() -> PricingConfig:
    return _read_pricing_file(DEFAULT_PRICING_FILE)


@lru_cache(maxsize=4)
def load_pricing_config(source: Path | None = None, allow_default: bool | None = None) -> PricingConfig:
    """Load and validate the tariff; cached per process.

    A missing file falls back to the packaged default when allowed. A file that
    exists but does not parse or validate always raises ``ConfigurationError``.
    """
    path = source or settings.pricing_config_file
    fallback_allowed = settings.allow_default_pricing if allow_default is None else allow_default

    if not path.exists():
        if not fallback_allowed:
            raise ConfigurationError(f"Pricing file not found: {path}")
        logger.warning(f"Pricing file '{path}' not found, using packaged default tariff")
        return load_default_pricing()

    config = _read_pricing_file(path)
    logger.info(
        f"Loaded pricing configuration from {path} "
        f"({len(config.trailers)} trailers, {len(config.zones)} zones)"
    )
    return config
