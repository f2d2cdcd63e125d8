"""Prometheus metrics for monitoring"""
from prometheus_client import Counter, Histogram, Gauge, CollectorRegistry
import time
from functools import wraps
from typing import Callable

registry = CollectorRegistry()

request_count = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status'],
    registry=registry
)

request_duration = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    registry=registry
)

quotes_computed = Counter(
    'quotes_computed_total',
    'Total quotes computed',
    ['tier', 'coupon_applied'],
    registry=registry
)

distance_lookups = Counter(
    'distance_lookups_total',
    'Total distance provider lookups',
    ['status'],
    registry=registry
)

distance_lookup_duration = Histogram(
    'distance_lookup_duration_seconds',
    'Distance provider lookup duration in seconds',
    ['status'],
    registry=registry
)

email_deliveries = Counter(
    'email_deliveries_total',
    'Total quote email delivery attempts',
    ['status', 'retry_count'],
    registry=registry
)

tariff_updates = Counter(
    'tariff_updates_total',
    'Total administrative tariff updates',
    ['action'],
    registry=registry
)

tariff_loaded = Gauge(
    'tariff_loaded',
    'Tariff file status (1=loaded from file, 0=using defaults)',
    registry=registry
)


def track_distance_lookup(func: Callable) -> Callable:
    """Decorator to track distance provider lookups"""
    @wraps(func)
    async def wrapper(*args, **kwargs):
        start_time = time.time()
        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            status = type(e).__name__
            distance_lookups.labels(status=status).inc()
            distance_lookup_duration.labels(status=status).observe(time.time() - start_time)
            raise
        distance_lookups.labels(status='ok').inc()
        distance_lookup_duration.labels(status='ok').observe(time.time() - start_time)
        return result
    return wrapper


def get_metrics_text() -> str:
    """Generate Prometheus metrics in text format"""
    from prometheus_client import generate_latest
    return generate_latest(registry).decode('utf-8')
