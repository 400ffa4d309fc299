import time
from functools import wraps

import structlog
from prometheus_client import Histogram

logger = structlog.get_logger(__name__)

HTTP_VIEW_DURATION = Histogram(
    "odonto_http_view_duration_seconds",
    "Duração das views da API por nome e status",
    ["view", "status"],
)


def track_http(view_name):
    """Mede a duração da view e registra no histograma por status HTTP."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(self, request, *args, **kwargs):
            start = time.perf_counter()
            status = "exception"
            try:
                resp = fn(self, request, *args, **kwargs)
                status = str(resp.status_code)
                return resp
            finally:
                elapsed = time.perf_counter() - start
                HTTP_VIEW_DURATION.labels(view=view_name, status=status).observe(elapsed)
                logger.debug("View executada", view=view_name, status=status, duration=f"{elapsed:.3f}s")
        return wrapper
    return decorator
