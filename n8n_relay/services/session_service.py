import httpx
from typing import Optional

from n8n_relay import config
from n8n_relay.exceptions import RelayError, response_body
from n8n_relay.http_client import http_client
from n8n_relay.logging_config import log_structured
from n8n_relay.metrics import UPSTREAM_REQUESTS


class SessionInvalid(RelayError):
    status_code = 401
    kind = "SessionInvalid"


async def probe_session(token: Optional[str]) -> dict:
    """Replay the session token to n8n's current-user endpoint.

    Only the auth cookie is forwarded. Any upstream failure is reported as a
    generic invalid session; the cause is logged, not returned.
    """
    if not token:
        raise SessionInvalid("No authentication cookie found")

    try:
        response = await http_client.request(
            "GET",
            config.N8N_USER_ENDPOINT,
            headers={
                "Cookie": f"{config.AUTH_COOKIE_NAME}={token}",
                "Content-Type": "application/json",
            },
            timeout=config.SESSION_TIMEOUT,
        )
    except httpx.HTTPError as e:
        UPSTREAM_REQUESTS.labels(operation="session", outcome="error").inc()
        log_structured("Session check failed", level="warning", error=str(e) or type(e).__name__)
        raise SessionInvalid("Session validation failed")

    if not response.is_success:
        UPSTREAM_REQUESTS.labels(operation="session", outcome="rejected").inc()
        log_structured("Session check failed", level="warning", status=response.status_code)
        raise SessionInvalid("Session validation failed")

    UPSTREAM_REQUESTS.labels(operation="session", outcome="success").inc()
    return {"success": True, "data": response_body(response)}
