"""Delivery quote endpoint"""
import logging
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from delivery_quote.schemas.quote import QuoteRequest, QuoteResponse
from delivery_quote.services.pricing import compute_quote
from delivery_quote.services.business_hours import compute_advisory, local_now
from delivery_quote.services.distance import (
    DistanceMatrixClient,
    DistanceProviderError,
    MapsNotConfiguredError,
    RouteNotFoundError,
    get_distance_client,
)
from delivery_quote.services.notifier import EmailNotifier, get_notifier
from delivery_quote.services.tariff_store import TariffStore, get_tariff_store
from delivery_quote.core.config import settings
from delivery_quote.core.metrics import quotes_computed

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/quotes", tags=["quotes"])


@router.post("", response_model=QuoteResponse)
async def create_quote(
    req: QuoteRequest,
    background_tasks: BackgroundTasks,
    distance_client: DistanceMatrixClient = Depends(get_distance_client),
    notifier: EmailNotifier = Depends(get_notifier),
    store: TariffStore = Depends(get_tariff_store),
):
    try:
        distance_km = await distance_client.get_distance_km(req.origin, req.destination)
    except MapsNotConfiguredError:
        logger.error("Quote requested but GOOGLE_MAPS_API_KEY is not set")
        raise HTTPException(status_code=500, detail="Maps API key is not configured")
    except RouteNotFoundError:
        raise HTTPException(status_code=400, detail="Could not calculate distance")
    except DistanceProviderError:
        raise HTTPException(status_code=500, detail="Maps provider error")

    breakdown = compute_quote(distance_km, req.coupon_code, store.current, tax_rate=settings.TAX_RATE)
    quotes_computed.labels(
        tier=str(breakdown.tier),
        coupon_applied=str(breakdown.coupon_code is not None).lower()
    ).inc()

    if req.coupon_code and breakdown.coupon_code is None:
        logger.info(f"Unknown coupon code '{req.coupon_code}' ignored")

    result = QuoteResponse(
        origin=req.origin,
        destination=req.destination,
        distance_km=breakdown.distance_km,
        tier=str(breakdown.tier),
        net=breakdown.net,
        discount=breakdown.discount,
        net_after_discount=breakdown.net_after_discount,
        tax=breakdown.tax,
        total=breakdown.total,
        discount_label=breakdown.discount_label,
        coupon_code=breakdown.coupon_code,
        advisory=compute_advisory(local_now()),
        email_queued=req.customer_email is not None,
    )

    if req.customer_email:
        background_tasks.add_task(notifier.send_quote, result, req.customer_name, req.customer_email)

    return result
