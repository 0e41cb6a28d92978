"""Rewriting of n8n session cookies for the relay's own origin.

n8n issues its ``Set-Cookie`` headers for its own host. The relay keeps each
cookie's name, value, lifetime and path, and replaces every other attribute
with the local :class:`CookiePolicy` so the embedding page can use the
session.
"""

import time
from email.utils import formatdate
from typing import Optional

from pydantic import BaseModel

from n8n_relay import config

# Latest instant an HTTP-date can express (9999-12-31T23:59:59Z).
MAX_EXPIRES_TIMESTAMP = 253402300799


class UpstreamCookie(BaseModel):
    name: str
    value: str
    max_age_seconds: Optional[int] = None
    path: Optional[str] = None


class CookiePolicy(BaseModel):
    httponly: bool = False
    secure: bool = False
    samesite: str = "Lax"
    default_max_age_seconds: int = 7 * 24 * 60 * 60

    @classmethod
    def from_config(cls) -> "CookiePolicy":
        return cls(
            httponly=config.COOKIE_HTTPONLY,
            secure=config.COOKIE_SECURE,
            samesite=config.COOKIE_SAMESITE,
            default_max_age_seconds=config.COOKIE_DEFAULT_MAX_AGE,
        )


class RewrittenCookie(BaseModel):
    name: str
    value: str
    max_age_ms: int
    path: str
    httponly: bool
    secure: bool
    samesite: str

    def to_header(self, now: Optional[float] = None) -> str:
        """Serialise as a ``Set-Cookie`` header value.

        Name and value are written as received; quoting them would change
        what the upstream server reads back.
        """
        max_age = self.max_age_ms // 1000
        if now is None:
            now = time.time()
        expires = min(max(now + max_age, 0), MAX_EXPIRES_TIMESTAMP)
        parts = [
            f"{self.name}={self.value}",
            f"Max-Age={max_age}",
            f"Path={self.path}",
            f"Expires={formatdate(expires, usegmt=True)}",
        ]
        if self.httponly:
            parts.append("HttpOnly")
        if self.secure:
            parts.append("Secure")
        if self.samesite:
            parts.append(f"SameSite={self.samesite}")
        return "; ".join(parts)

def parse_set_cookie(raw: str) -> UpstreamCookie:
    name_value, *attributes = raw.split(";")
    name, _, value = name_value.partition("=")

    max_age = None
    path = None
    for attribute in attributes:
        key, _, attr_value = attribute.strip().partition("=")
        key = key.strip().lower()
        attr_value = attr_value.strip()
        if key == "max-age":
            try:
                max_age = int(attr_value)
            except ValueError:
                continue
        elif key == "path":
            path = attr_value or "/"

    return UpstreamCookie(name=name.strip(), value=value.strip(), max_age_seconds=max_age, path=path)

def rewrite_cookie(cookie: UpstreamCookie, policy: CookiePolicy) -> RewrittenCookie:
    if cookie.max_age_seconds is not None:
        max_age_ms = cookie.max_age_seconds * 1000
    else:
        max_age_ms = policy.default_max_age_seconds * 1000

    return RewrittenCookie(
        name=cookie.name,
        value=cookie.value,
        max_age_ms=max_age_ms,
        path=cookie.path or "/",
        httponly=policy.httponly,
        secure=policy.secure,
        samesite=policy.samesite,
    )

def extract_cookie(cookie_header: Optional[str], name: str) -> Optional[str]:
    """Return the value of cookie ``name`` from a ``Cookie`` request header."""
    if not cookie_header:
        return None
    for pair in cookie_header.split(";"):
        key, sep, value = pair.strip().partition("=")
        if sep and key == name:
            return value
    return None
