"""
HTTP client for the SkillSwap REST API.

Wraps httpx.AsyncClient with the conventions every endpoint shares:
JSON bodies, a session cookie jar, and non-2xx responses mapped to
RequestFailure carrying the server's {message} when it sent one.
"""

import logging
from typing import Any, Optional

import httpx

from .config import get_settings
from .exceptions import RequestFailure

logger = logging.getLogger(__name__)

DEFAULT_FAILURE_MESSAGE = "Request failed"


def extract_error_message(response: httpx.Response) -> Optional[str]:
    """Return the {message} field of an error body, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
    return None


class ApiClient:
    """
    Async client for the SkillSwap API.

    A single instance is shared per process so that the session cookie
    set by login/verify is sent with every later request.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        cookies: Optional[dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: API root. Defaults to settings.api_base_url.
            timeout: Per-request timeout in seconds. Defaults to settings.request_timeout.
            cookies: Session cookies to restore (e.g., from local storage).
            transport: Optional httpx transport, used by tests to stub the API.
        """
        settings = get_settings()
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            timeout=timeout if timeout is not None else settings.request_timeout,
            cookies=cookies,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    @property
    def cookies(self) -> dict[str, str]:
        """Current session cookies as a plain dict."""
        return {cookie.name: cookie.value for cookie in self._client.cookies.jar}

    async def request(
        self,
        method: str,
        path: str,
        json: Optional[dict[str, Any]] = None,
        fallback_message: str = DEFAULT_FAILURE_MESSAGE,
        params: Optional[dict[str, Any]] = None,
    ) -> httpx.Response:
        """
        Send a request and return the raw response, whatever its status.

        Transport errors (connection refused, timeouts) are raised as
        RequestFailure with the fallback message.
        """
        try:
            response = await self._client.request(method, path, json=json, params=params)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise RequestFailure(fallback_message, method=method, path=path) from e

        logger.debug(f"{method} {path} -> {response.status_code}")
        return response

    async def send(
        self,
        method: str,
        path: str,
        json: Optional[dict[str, Any]] = None,
        fallback_message: str = DEFAULT_FAILURE_MESSAGE,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        """
        Send a request and return the decoded JSON body.

        Raises:
            RequestFailure: On a non-2xx response or transport error. The
                message is the server's {message} if present, otherwise
                fallback_message.
        """
        response = await self.request(
            method, path, json=json, fallback_message=fallback_message, params=params
        )

        if not response.is_success:
            raise RequestFailure(
                extract_error_message(response) or fallback_message,
                status_code=response.status_code,
                method=method,
                path=path,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.send("GET", path, **kwargs)

    async def post(self, path: str, json: Optional[dict[str, Any]] = None, **kwargs: Any) -> Any:
        return await self.send("POST", path, json=json, **kwargs)

    async def patch(self, path: str, json: Optional[dict[str, Any]] = None, **kwargs: Any) -> Any:
        return await self.send("PATCH", path, json=json, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.send("DELETE", path, **kwargs)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
