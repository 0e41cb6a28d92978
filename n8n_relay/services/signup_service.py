import httpx
from typing import Any, Optional
from urllib.parse import parse_qs, urlparse

from n8n_relay import config
from n8n_relay.exceptions import ValidationError, classify_upstream_error, response_body
from n8n_relay.http_client import http_client
from n8n_relay.logging_config import log_structured
from n8n_relay.metrics import UPSTREAM_REQUESTS


def extract_invite_accept_url(data: Any) -> Optional[str]:
    """Read ``data[0].user.inviteAcceptUrl`` from n8n's create-users reply."""
    if not isinstance(data, list) or not data:
        return None
    first = data[0]
    if not isinstance(first, dict):
        return None
    user = first.get("user")
    if not isinstance(user, dict):
        return None
    return user.get("inviteAcceptUrl")


def parse_invite_url(url: str) -> dict:
    params = parse_qs(urlparse(url).query)
    return {
        "inviterId": params.get("inviterId", [None])[0],
        "inviteeId": params.get("inviteeId", [None])[0],
    }


async def relay_signup(email: Optional[str], role: Optional[str] = None) -> dict:
    if not email:
        raise ValidationError("Email is required")

    role = role or config.DEFAULT_USER_ROLE
    log_structured("Proxying create user request to n8n", email=email, role=role)

    try:
        response = await http_client.request(
            "POST",
            config.N8N_USERS_ENDPOINT,
            json=[{"email": email, "role": role}],
            headers={"Content-Type": "application/json", "X-N8N-API-KEY": config.N8N_API_KEY},
            timeout=config.SIGNUP_TIMEOUT,
        )
    except httpx.HTTPError as e:
        UPSTREAM_REQUESTS.labels(operation="signup", outcome="error").inc()
        raise classify_upstream_error(e, "Invalid API key.", "User already exists.")

    if not response.is_success:
        UPSTREAM_REQUESTS.labels(operation="signup", outcome="rejected").inc()
        raise classify_upstream_error(response, "Invalid API key.", "User already exists.")

    UPSTREAM_REQUESTS.labels(operation="signup", outcome="success").inc()
    data = response_body(response)
    invite_url = extract_invite_accept_url(data)
    if not invite_url:
        log_structured("No invitation URL in n8n response", level="warning", email=email)

    body = {
        "success": True,
        "message": "User created successfully",
        "data": data,
        "inviteAcceptUrl": invite_url,
    }
    if invite_url:
        body["invitation"] = parse_invite_url(invite_url)
    return body
