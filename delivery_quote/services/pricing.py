from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from delivery_quote.core.enums import PricingTier
from delivery_quote.schemas.tariff import TariffConfig, normalize_coupon_code

BASE_TIER_MAX_KM = Decimal("6")
MID_TIER_MAX_KM = Decimal("10")
DEFAULT_TAX_RATE = 0.19


@dataclass(frozen=True)
class QuoteBreakdown:
    distance_km: float
    tier: PricingTier
    net: int
    discount: int
    net_after_discount: int
    tax: int
    total: int
    discount_label: str = ""
    coupon_code: Optional[str] = None


def _dec(value) -> Decimal:
    return Decimal(str(value))


def round_currency(value) -> int:
    """Round to a whole currency unit, halves away from zero."""
    return int(_dec(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _format_percent(fraction: float) -> str:
    percent = (_dec(fraction) * 100).normalize()
    return f"{percent:f}"


def tier_for_distance(distance_km: float) -> PricingTier:
    d = _dec(distance_km)
    if d <= BASE_TIER_MAX_KM:
        return PricingTier.BASE
    if d <= MID_TIER_MAX_KM:
        return PricingTier.MID
    return PricingTier.FAR


def net_for_distance(distance_km: float, tariff: TariffConfig) -> int:
    d = _dec(distance_km)
    base = _dec(tariff.base_fare)
    mid = _dec(tariff.mid_tier_rate)
    far = _dec(tariff.far_tier_rate)

    tier = tier_for_distance(distance_km)
    if tier == PricingTier.BASE:
        net = base
    elif tier == PricingTier.MID:
        net = base + (d - BASE_TIER_MAX_KM) * mid
    else:
        net = base + (MID_TIER_MAX_KM - BASE_TIER_MAX_KM) * mid + (d - MID_TIER_MAX_KM) * far
    return round_currency(net)


def compute_quote(
    distance_km: float,
    coupon_code: Optional[str],
    tariff: TariffConfig,
    tax_rate: float = DEFAULT_TAX_RATE,
) -> QuoteBreakdown:
    tier = tier_for_distance(distance_km)
    net = net_for_distance(distance_km, tariff)

    if tariff.global_adjustment:
        net = round_currency(net * (1 + _dec(tariff.global_adjustment)))

    discount = 0
    discount_label = ""
    code = normalize_coupon_code(coupon_code) if coupon_code else ""
    applied_code = None
    if code and code in tariff.coupons:
        fraction = tariff.coupons[code]
        discount = round_currency(net * _dec(fraction))
        discount_label = f"{code} (-{_format_percent(fraction)}%)"
        applied_code = code

    net_after_discount = net - discount
    tax = round_currency(net_after_discount * _dec(tax_rate))

    return QuoteBreakdown(
        distance_km=distance_km,
        tier=tier,
        net=net,
        discount=discount,
        net_after_discount=net_after_discount,
        tax=tax,
        total=net_after_discount + tax,
        discount_label=discount_label,
        coupon_code=applied_code,
    )
