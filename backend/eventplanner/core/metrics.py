"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Record mutations
record_mutations = Counter(
    'record_mutations_total',
    'Create/update/delete operations on planner records',
    ['resource', 'operation']  # event|guest|vendor, create|update|patch|delete
)

# Denormalized counter maintenance
counter_recomputes = Counter(
    'counter_recomputes_total',
    'Recomputations of denormalized event counters',
    ['counter']  # guest_count, vendor_count
)

cascade_deletes = Counter(
    'cascade_deleted_records_total',
    'Dependent records removed by an event delete',
    ['resource']  # guest, vendor
)

# Statistics
stats_computations = Counter(
    'stats_computations_total',
    'On-demand statistics computations',
    ['kind']  # event_details, event_stats, guest_stats, vendor_stats
)

# Cache metrics
cache_operations = Counter(
    'cache_operations_total',
    'Cache operations',
    ['operation', 'result']  # get/set, hit/miss
)

# HTTP
request_latency = Histogram(
    'http_request_latency_seconds',
    'Request latency',
    ['method', 'route', 'status_code'],
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)


def metrics_endpoint() -> Response:
    """
    Prometheus metrics endpoint.

    Usage:
        @app.get("/metrics")
        def metrics():
            return metrics_endpoint()
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_mutation(resource: str, operation: str, amount: int = 1):
    """Record a mutation. Resource: event, guest, vendor."""
    record_mutations.labels(resource=resource, operation=operation).inc(amount)


def record_counter_recompute(counter: str):
    counter_recomputes.labels(counter=counter).inc()


def record_cascade_delete(resource: str, amount: int):
    cascade_deletes.labels(resource=resource).inc(amount)


def record_stats(kind: str):
    stats_computations.labels(kind=kind).inc()


def record_cache_operation(operation: str, hit: bool):
    """Record cache operation."""
    result = "hit" if hit else "miss"
    cache_operations.labels(operation=operation, result=result).inc()


def observe_request(method: str, route: str, status_code: int, seconds: float):
    request_latency.labels(method=method, route=route, status_code=str(status_code)).observe(seconds)
