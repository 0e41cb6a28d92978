import time
import uuid
from fastapi import Request
from n8n_relay.logging_config import log_structured
from n8n_relay.metrics import REQUEST_COUNT, REQUEST_LATENCY

def endpoint_label(request: Request, status_code: int) -> str:
    """Metric label for a request: the matched route template, never the raw path."""
    route = request.scope.get("route")
    if route is not None:
        return route.path
    # Mounted apps (static files) expose their prefix as root_path.
    root_path = request.scope.get("root_path")
    if status_code != 404 and root_path:
        return root_path
    return "unmatched"

async def request_id_middleware(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    request.state.request_id = request_id

    start_time = time.perf_counter()
    response = await call_next(request)
    process_time = time.perf_counter() - start_time

    response.headers["X-Request-ID"] = request_id
    response.headers["X-Process-Time"] = str(process_time)

    log_structured("Request processed", method=request.method, path=request.url.path, status_code=response.status_code, process_time=process_time, request_id=request_id)

    endpoint = endpoint_label(request, response.status_code)
    REQUEST_COUNT.labels(method=request.method, endpoint=endpoint, status_code=response.status_code).inc()
    REQUEST_LATENCY.labels(method=request.method, endpoint=endpoint, status_code=response.status_code).observe(process_time)

    return response
