import time
from functools import wraps

from flask import make_response, request
from prometheus_client import Counter, Histogram

REQUEST_COUNTER = Counter(
    "starledger_http_requests_total",
    "Total HTTP requests by response status",
    ["blueprint", "endpoint", "method", "status"],
)
REQUEST_LATENCY = Histogram(
    "starledger_http_request_latency_seconds",
    "HTTP request latency",
    ["blueprint", "endpoint", "method"],
)
ERROR_COUNTER = Counter(
    "starledger_http_request_errors_total",
    "HTTP requests whose view raised; the status is set later by the error handlers",
    ["blueprint", "endpoint", "method"],
)


def _route_labels(fn):
    return {
        "blueprint": request.blueprint or "unknown",
        "endpoint": request.endpoint or fn.__name__,
        "method": request.method,
    }


def metrics(fn):
    """
    Instrument a view. Apply it outermost so responses produced by the
    validation decorators are counted too.
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        labels = _route_labels(fn)
        start = time.time()
        try:
            response = make_response(fn(*args, **kwargs))
        except Exception:
            ERROR_COUNTER.labels(**labels).inc()
            REQUEST_COUNTER.labels(status="exception", **labels).inc()
            raise
        finally:
            REQUEST_LATENCY.labels(**labels).observe(time.time() - start)
        REQUEST_COUNTER.labels(status=str(response.status_code), **labels).inc()
        return response

    return wrapper
