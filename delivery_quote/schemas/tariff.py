import math
from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_BASE_FARE = 6000.0
DEFAULT_MID_TIER_RATE = 1000.0
DEFAULT_FAR_TIER_RATE = 850.0


def normalize_percent(value: float) -> float:
    """Return a percentage as a fraction in [0, 1].

    Operators enter either a whole percent (15) or a fraction (0.15); anything
    above 1 is taken as a whole percent. Fractions pass through unchanged, so
    normalizing a stored value twice is a no-op.
    """
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"percentage must be a finite number, got {value}")
    if value < 0 or value > 100:
        raise ValueError(f"percentage must be between 0 and 100, got {value}")
    if value > 1:
        return value / 100
    return value


def normalize_coupon_code(code: str) -> str:
    return code.strip().upper()


def normalize_coupons(coupons: Dict[str, float]) -> Dict[str, float]:
    normalized = {}
    for code, percent in coupons.items():
        code = normalize_coupon_code(code)
        if not code:
            raise ValueError("coupon code cannot be empty")
        normalized[code] = normalize_percent(percent)
    return normalized


class TariffConfig(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    base_fare: float = Field(DEFAULT_BASE_FARE, ge=0)
    mid_tier_rate: float = Field(DEFAULT_MID_TIER_RATE, ge=0)
    far_tier_rate: float = Field(DEFAULT_FAR_TIER_RATE, ge=0)
    global_adjustment: float = 0.0
    coupons: Dict[str, float] = Field(default_factory=dict)

    @field_validator("global_adjustment")
    @classmethod
    def _normalize_adjustment(cls, v: float) -> float:
        return normalize_percent(v)

    @field_validator("coupons")
    @classmethod
    def _normalize_coupons(cls, v: Dict[str, float]) -> Dict[str, float]:
        return normalize_coupons(v)


class TariffUpdate(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    base_fare: Optional[float] = Field(None, ge=0)
    mid_tier_rate: Optional[float] = Field(None, ge=0)
    far_tier_rate: Optional[float] = Field(None, ge=0)
    global_adjustment: Optional[float] = Field(None, ge=0, le=100)
    coupons: Optional[Dict[str, float]] = None

    @field_validator("coupons")
    @classmethod
    def _check_coupons(cls, v: Optional[Dict[str, float]]) -> Optional[Dict[str, float]]:
        if v is None:
            return v
        return normalize_coupons(v)
