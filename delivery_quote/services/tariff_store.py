"""File-backed tariff configuration with a single writer"""
import asyncio
import json
import logging
import math
import os
import tempfile
from pathlib import Path
from typing import Any

from fastapi import Request

from delivery_quote.core.metrics import tariff_loaded
from delivery_quote.schemas.tariff import (
    TariffConfig,
    TariffUpdate,
    normalize_coupon_code,
    normalize_percent,
)

logger = logging.getLogger(__name__)

RATE_FIELDS = ("base_fare", "mid_tier_rate", "far_tier_rate")


def _non_negative(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError("boolean is not a number")
    number = float(value)
    if number < 0 or not math.isfinite(number):
        raise ValueError(f"invalid amount {value!r}")
    return number


def parse_tariff(raw: Any) -> TariffConfig:
    """Build a TariffConfig from a loaded document, field by field.

    A malformed field falls back to its default instead of rejecting the
    whole document; malformed coupon entries are dropped.
    """
    if not isinstance(raw, dict):
        logger.warning("Tariff document is not an object, using defaults")
        return TariffConfig()

    values = {}
    for field in RATE_FIELDS:
        if field not in raw:
            continue
        try:
            values[field] = _non_negative(raw[field])
        except (TypeError, ValueError):
            logger.warning(f"Invalid tariff field {field}={raw[field]!r}, using default")

    if "global_adjustment" in raw:
        try:
            values["global_adjustment"] = normalize_percent(_non_negative(raw["global_adjustment"]))
        except (TypeError, ValueError):
            logger.warning(f"Invalid global_adjustment={raw['global_adjustment']!r}, using default")

    coupons = raw.get("coupons", {})
    if not isinstance(coupons, dict):
        logger.warning("Invalid coupon table, ignoring it")
        coupons = {}
    values["coupons"] = {}
    for code, percent in coupons.items():
        try:
            code = normalize_coupon_code(str(code))
            if not code:
                raise ValueError("empty coupon code")
            values["coupons"][code] = normalize_percent(_non_negative(percent))
        except (TypeError, ValueError):
            logger.warning(f"Dropping invalid coupon {code!r}: {percent!r}")

    return TariffConfig(**values)


class TariffStore:
    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._config = TariffConfig()
        self._lock = asyncio.Lock()

    @property
    def current(self) -> TariffConfig:
        # copy so callers cannot edit the coupon table behind the lock
        return self._config.model_copy(deep=True)

    def load(self) -> TariffConfig:
        if not self.path.exists():
            logger.info(f"Tariff file {self.path} not found, using defaults")
            tariff_loaded.set(0)
            self._config = TariffConfig()
            return self._config

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read tariff file {self.path}: {e}")
            tariff_loaded.set(0)
            self._config = TariffConfig()
            return self._config

        self._config = parse_tariff(raw)
        tariff_loaded.set(1)
        logger.info(f"Tariff loaded from {self.path}")
        return self._config

    def _write(self, config: TariffConfig) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".tariff-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(config.model_dump(), f, indent=2, sort_keys=True)
            os.replace(tmp_path, self.path)
        except Exception:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    async def replace(self, config: TariffConfig) -> TariffConfig:
        async with self._lock:
            self._write(config)
            self._config = config.model_copy(deep=True)
            tariff_loaded.set(1)
        logger.info(f"Tariff replaced and saved to {self.path}")
        return config

    async def update(self, changes: TariffUpdate) -> TariffConfig:
        async with self._lock:
            merged = self._config.model_dump()
            merged.update(changes.model_dump(exclude_unset=True, exclude_none=True))
            config = TariffConfig(**merged)
            self._write(config)
            self._config = config
            tariff_loaded.set(1)
        logger.info(f"Tariff updated and saved to {self.path}")
        return config


def get_tariff_store(request: Request) -> TariffStore:
    return request.app.state.tariff_store
