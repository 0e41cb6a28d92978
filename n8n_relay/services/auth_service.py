import httpx
from typing import List, Optional, Tuple

from n8n_relay import config
from n8n_relay.cookies import CookiePolicy, RewrittenCookie, parse_set_cookie, rewrite_cookie
from n8n_relay.exceptions import ValidationError, classify_upstream_error, response_body
from n8n_relay.http_client import http_client
from n8n_relay.logging_config import log_structured
from n8n_relay.metrics import UPSTREAM_REQUESTS


def rewrite_upstream_cookies(raw_cookies: List[str], policy: CookiePolicy) -> List[RewrittenCookie]:
    rewritten = []
    for raw in raw_cookies:
        cookie = rewrite_cookie(parse_set_cookie(raw), policy)
        rewritten.append(cookie)
        log_structured("Set cookie", cookie=cookie.name)
    return rewritten


async def relay_login(email: Optional[str], password: Optional[str]) -> Tuple[dict, List[RewrittenCookie]]:
    """Log in against n8n and return the response body plus the cookies to set."""
    if not email or not password:
        raise ValidationError("Email and password are required")

    policy = CookiePolicy.from_config()
    log_structured("Proxying login request to n8n", email=email)

    try:
        response = await http_client.request(
            "POST",
            config.N8N_LOGIN_ENDPOINT,
            json={"emailOrLdapLoginId": email, "password": password},
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            timeout=config.LOGIN_TIMEOUT,
        )
    except httpx.HTTPError as e:
        UPSTREAM_REQUESTS.labels(operation="login", outcome="error").inc()
        raise classify_upstream_error(e, "Invalid credentials provided.")

    if not response.is_success:
        UPSTREAM_REQUESTS.labels(operation="login", outcome="rejected").inc()
        raise classify_upstream_error(response, "Invalid credentials provided.")

    UPSTREAM_REQUESTS.labels(operation="login", outcome="success").inc()
    raw_cookies = response.headers.get_list("set-cookie")
    log_structured("n8n login successful", status=response.status_code, cookies=len(raw_cookies))

    body = {
        "success": True,
        "message": "Authentication successful",
        "data": response_body(response),
        "cookies": raw_cookies,
        "status": response.status_code,
        "headers": {"set-cookie": raw_cookies},
    }
    return body, rewrite_upstream_cookies(raw_cookies, policy)
