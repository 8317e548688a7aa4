"""
HTTP client for the brand-service REST backend

Every outbound call goes through BackendClient.call, which is also the one
place where transport failures are classified into the BackendError family.
"""
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from brandservice.config.settings import validate_environment
from brandservice.observability.logging import get_logger
from brandservice.observability.metrics import get_metrics_collector
from brandservice.services.session import Session
from brandservice.utils.exceptions import (
    LocalRequestError,
    NetworkError,
    UpstreamHttpError,
    UpstreamTimeoutError,
)

logger = get_logger(__name__)

DEFAULT_BINARY_CONTENT_TYPE = "application/octet-stream"


@dataclass
class BackendResponse:
    """Decoded backend response"""
    status_code: int
    data: Any = None
    content: bytes = b""
    content_type: Optional[str] = None
    content_disposition: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)


class BackendClient:
    """Async client for the brand backend"""

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        domain: Optional[str] = None,
        timeout_ms: int = 15000,
        user_agent: str = "BrandService-MCP/1.0.0",
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.domain = domain
        self.timeout_ms = timeout_ms
        self.user_agent = user_agent
        # Injected in tests (httpx.MockTransport)
        self._transport = transport

    def _build_headers(
        self,
        headers: Optional[Dict[str, str]],
        session: Optional[Session],
        use_api_key: bool
    ) -> httpx.Headers:
        merged = httpx.Headers({
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        })
        if use_api_key:
            if self.api_key:
                merged["x-api-key"] = self.api_key
            if self.domain:
                merged["Origin"] = self.domain
                merged["Referer"] = self.domain
                merged["Host"] = self.domain
        if headers:
            # Case-insensitive; caller values replace defaults
            merged.update(headers)
        if session is not None and session.access_token and "authorization" not in merged:
            merged["Authorization"] = f"Bearer {session.access_token}"
        return merged

    async def call(
        self,
        path: str,
        method: str = "GET",
        *,
        operation: str = "Request",
        body: Any = None,
        content: Optional[str] = None,
        query: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        session: Optional[Session] = None,
        response_kind: str = "json",
        use_api_key: bool = False
    ) -> BackendResponse:
        """
        Perform exactly one HTTP request against the backend

        Args:
            path: Path relative to the base URL, already encoded
            method: HTTP method
            operation: Human label used in error messages ("Get brand by ID")
            body: JSON body. None sends no body.
            content: Raw text body, used instead of `body`
            query: Query parameters. None values are dropped.
            headers: Extra headers, merged over the defaults
            session: Session whose access token becomes the bearer header
            response_kind: "json" or "binary"
            use_api_key: Send x-api-key and the Origin/Referer/Host domain headers

        Raises:
            UpstreamHttpError: non-2xx response
            UpstreamTimeoutError: timeout elapsed
            NetworkError: no response received
            LocalRequestError: request could not be built or sent
        """
        url = f"{self.base_url}{path}"
        params = {k: v for k, v in (query or {}).items() if v is not None}
        request_headers = self._build_headers(headers, session, use_api_key)

        request_kwargs: Dict[str, Any] = {"params": params, "headers": request_headers}
        if content is not None:
            request_kwargs["content"] = content
        elif body is not None:
            request_kwargs["json"] = body

        metrics = get_metrics_collector()
        start_time = time.time()
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_ms / 1000.0,
                transport=self._transport
            ) as client:
                response = await client.request(method, url, **request_kwargs)
        except httpx.TimeoutException as e:
            metrics.record_backend_call(method, path, (time.time() - start_time) * 1000, None)
            raise UpstreamTimeoutError(operation, self.timeout_ms, e) from e
        except httpx.TransportError as e:
            metrics.record_backend_call(method, path, (time.time() - start_time) * 1000, None)
            if isinstance(e, (httpx.UnsupportedProtocol, httpx.LocalProtocolError)):
                raise LocalRequestError(operation, str(e), e) from e
            raise NetworkError(url, e) from e
        except (httpx.InvalidURL, httpx.RequestError, TypeError, ValueError) as e:
            metrics.record_backend_call(method, path, (time.time() - start_time) * 1000, None)
            raise LocalRequestError(operation, str(e), e) from e

        duration_ms = (time.time() - start_time) * 1000
        metrics.record_backend_call(method, path, duration_ms, response.status_code)

        if not response.is_success:
            detail = _error_detail(response)
            logger.warning(
                "Backend returned error status",
                extra={"method": method, "path": path, "status_code": response.status_code, "detail": detail}
            )
            raise UpstreamHttpError(operation, response.status_code, detail)

        if response_kind == "binary":
            return BackendResponse(
                status_code=response.status_code,
                content=response.content,
                content_type=response.headers.get("content-type") or DEFAULT_BINARY_CONTENT_TYPE,
                content_disposition=response.headers.get("content-disposition"),
                headers=dict(response.headers),
            )

        return BackendResponse(
            status_code=response.status_code,
            data=_decode_json(response),
            content_type=response.headers.get("content-type"),
            headers=dict(response.headers),
        )


def _decode_json(response: httpx.Response) -> Any:
    if response.status_code == 204 or not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _error_detail(response: httpx.Response) -> str:
    """Backend `message`, then `error`, then the status reason phrase"""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        for key in ("message", "error"):
            value = data.get(key)
            if isinstance(value, str) and value.strip():
                return value
    return response.reason_phrase or f"HTTP {response.status_code}"


# Global backend client instance
_backend_client: Optional[BackendClient] = None


def get_backend_client() -> BackendClient:
    """
    Get global backend client built from settings

    Raises:
        ConfigurationError: when API_BASE_URL or API_KEY is missing
    """
    global _backend_client
    if _backend_client is None:
        config = validate_environment()
        _backend_client = BackendClient(
            base_url=config.API_BASE_URL,
            api_key=config.API_KEY,
            domain=config.API_DOMAIN,
            timeout_ms=config.MCP_TOOL_TIMEOUT_MS,
            user_agent=config.USER_AGENT,
        )
    return _backend_client
