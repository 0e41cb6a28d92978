import httpx
from http.cookiejar import CookieJar, DefaultCookiePolicy
from typing import Optional

class HttpClient:
    """Shared httpx client; per-call timeouts are passed by each relay."""

    def __init__(self, timeout: float = 30):
        self.timeout = timeout
        self.client: Optional[httpx.AsyncClient] = None

    async def start(self):
        # Upstream session cookies belong to the caller, never to the client jar.
        stateless_jar = CookieJar(policy=DefaultCookiePolicy(allowed_domains=[]))
        self.client = httpx.AsyncClient(timeout=self.timeout, cookies=stateless_jar)

    async def stop(self):
        if self.client:
            await self.client.aclose()
            self.client = None

    async def request(self, method: str, url: str, **kwargs) -> httpx.Response:
        if not self.client:
            raise RuntimeError("HTTP client not initialized.")
        return await self.client.request(method, url, **kwargs)

http_client = HttpClient()
