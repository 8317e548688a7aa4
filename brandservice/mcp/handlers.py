"""
Tool-specific behaviour plugged into endpoint descriptors

Summary builders, argument preparation hooks and the few handlers that do
more than one descriptor-driven request (session-mutating auth calls,
forwarding, profile updates).
"""
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from brandservice.config.settings import settings
from brandservice.mcp.endpoints import (
    EndpointDescriptor,
    build_body,
    is_present,
    resolve_values,
    send,
    success,
)
from brandservice.mcp.schemas import ToolSuccess
from brandservice.observability.logging import get_logger
from brandservice.services.backend_client import BackendClient
from brandservice.services.session import Session
from brandservice.utils.exceptions import AuthenticationRequiredError, ValidationError

logger = get_logger(__name__)

REDACTED = "***"
TOKEN_FIELDS = ("token", "accessToken", "refreshToken")


# ---------------------------------------------------------------------------
# Summary builders
# ---------------------------------------------------------------------------

def fixed(text: str):
    return lambda payload, values: text


def formatted(template: str):
    return lambda payload, values: template.format(**values)


def list_length(value: Any) -> Optional[int]:
    return len(value) if isinstance(value, list) else None


def counted(template: str):
    """Template with {count}: length of the response list, 0 otherwise"""
    def summary(payload, values):
        return template.format(count=list_length(payload.get("data")) or 0, **values)
    return summary


def _nested_list_length(data: Any, *keys: str) -> Optional[int]:
    if isinstance(data, dict):
        for key in keys:
            count = list_length(data.get(key))
            if count is not None:
                return count
    return None


def brands_paged_summary(payload, values) -> str:
    data = payload.get("data")
    count = _nested_list_length(data, "content", "data")
    total = None
    if isinstance(data, dict):
        total = data.get("totalElements", data.get("total"))
    text = f"Retrieved brands page={values['page']}, size={values['size']}"
    if count is not None:
        text += f", count={count}"
    if total is not None:
        text += f", total={total}"
    return text + "."


def search_summary(payload, values) -> str:
    count = _nested_list_length(payload.get("data"), "content")
    suffix = f", returned {count}" if count is not None else ""
    return f"Searched brands for '{values['q']}'{suffix}."


def domain_summary(payload, values) -> str:
    count = list_length(payload.get("data"))
    suffix = f" ({count} match(es))" if count is not None else ""
    return f"Retrieved brands containing domain '{values['domain']}'{suffix}."


def dashboard_searches_summary(payload, values) -> str:
    count = _nested_list_length(payload.get("data"), "brands", "recentDomains")
    suffix = f" ({count} items)" if count is not None else ""
    return f"Retrieved dashboard searches{suffix}."


def dashboard_details_summary(payload, values) -> str:
    data = payload.get("data")
    company = data.get("Company") if isinstance(data, dict) else None
    name = company.get("Name") if isinstance(company, dict) else None
    return f"Retrieved dashboard details for brand {name or values['brandId']}."


def _all_brands_count(data: Any) -> Optional[int]:
    count = _nested_list_length(data, "data")
    if count is None and isinstance(data, dict):
        count = data.get("count")
    return count


def all_brands_summary(payload, values) -> str:
    count = _all_brands_count(payload.get("data"))
    suffix = f" ({count} item(s))" if count is not None else ""
    return f"Retrieved brands{suffix} using /api/brands/all."


def legacy_brands_summary(payload, values) -> str:
    count = _all_brands_count(payload.get("data"))
    suffix = f" ({count} item(s))" if count is not None else ""
    return f"Retrieved brands via legacy endpoint{suffix}."


def category_summary(template: str):
    """Category listings answer either a list or {data: [...]}"""
    def summary(payload, values):
        data = payload.get("data")
        count = list_length(data)
        if count is None:
            count = _nested_list_length(data, "data")
        suffix = f" ({count} item(s))" if count is not None else ""
        return template.format(suffix=suffix, **values)
    return summary


def brand_identity_summary(payload, values) -> str:
    data = payload.get("data") if isinstance(payload.get("data"), dict) else {}
    company = data.get("Company") or {}
    logo_block = data.get("Logo") or {}
    colors = [c.get("hex") for c in data.get("Colors") or [] if isinstance(c, dict) and c.get("hex")]
    fonts = [f.get("name") for f in data.get("Fonts") or [] if isinstance(f, dict) and f.get("name")]
    logo = logo_block.get("Logo") or logo_block.get("Icon")

    text = f"I found the brand identity for {company.get('Name') or company.get('Website') or values['url']}."
    if logo:
        text += f" Logo available ({logo})."
    if colors:
        text += f" Primary colors include {', '.join(colors)}."
    if fonts:
        text += f" Fonts used: {', '.join(fonts)}."
    return text


def renew_summary(payload, values) -> str:
    months = values.get("durationMonths")
    suffix = f" for {months} month(s)" if months else ""
    return f"Renewed add-on {values['addOnId']}{suffix}."


def binary_summary(kind: str, id_field: str):
    def summary(payload, values):
        return f"Downloaded brand {kind} {values[id_field]} (content-type: {payload['contentType']})."
    return summary


# ---------------------------------------------------------------------------
# Argument preparation
# ---------------------------------------------------------------------------

def _number(value: Any, field: str, message: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValidationError(message, field)
    try:
        return float(value)
    except ValueError as e:
        raise ValidationError(message, field) from e


def positive_int(value: Any, field: str) -> int:
    message = f"{field} must be a positive integer"
    number = _number(value, field, message)
    if not number.is_integer() or number < 1:
        raise ValidationError(message, field)
    return int(number)


def non_negative_number(value: Any, field: str) -> float:
    message = f"{field} must be a non-negative number"
    number = _number(value, field, message)
    if number != number or number < 0:
        raise ValidationError(message, field)
    return int(number) if number.is_integer() else number


def validate_url(url: Any, field: str = "url") -> str:
    parsed = urlparse(url if isinstance(url, str) else "")
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError("Invalid URL format provided", field)
    return url


def prepare_url(arguments: Dict[str, Any]) -> Dict[str, Any]:
    validate_url(arguments.get("url"))
    return arguments


def prepare_scopes(arguments: Dict[str, Any]) -> Dict[str, Any]:
    scopes = arguments.get("scopes")
    if isinstance(scopes, list):
        scopes = ",".join(str(s).strip() for s in scopes if str(s).strip())
    if not isinstance(scopes, str) or not scopes.strip():
        raise ValidationError("Scopes must be a non-empty string or array of strings", "scopes")
    arguments["scopes"] = scopes.strip()
    return arguments


def prepare_purchase(arguments: Dict[str, Any]) -> Dict[str, Any]:
    if arguments.get("durationMonths") is not None:
        arguments["durationMonths"] = positive_int(arguments["durationMonths"], "durationMonths")
    if arguments.get("autoRenew") is not None:
        arguments["autoRenew"] = bool(arguments["autoRenew"])
    if arguments.get("addOnPackage") == "ADDON_CUSTOM":
        requests = arguments.get("customRequests")
        price = arguments.get("customPrice")
        if requests is None or _number(requests, "customRequests", "customRequests must be a number") <= 0:
            raise ValidationError("customRequests must be greater than 0 for ADDON_CUSTOM", "customRequests")
        if price is None or _number(price, "customPrice", "customPrice must be a number") < 0:
            raise ValidationError("customPrice must be 0 or greater for ADDON_CUSTOM", "customPrice")
    return arguments


def prepare_recommendations(arguments: Dict[str, Any]) -> Dict[str, Any]:
    if arguments.get("overageRequests") is not None:
        arguments["overageRequests"] = non_negative_number(arguments["overageRequests"], "overageRequests")
    return arguments


def prepare_renewal(arguments: Dict[str, Any]) -> Dict[str, Any]:
    if arguments.get("durationMonths") is not None:
        arguments["durationMonths"] = positive_int(arguments["durationMonths"], "durationMonths")
    return arguments


# ---------------------------------------------------------------------------
# Custom handlers
# ---------------------------------------------------------------------------

def redact_tokens(data: Any) -> Any:
    """Mask token fields when REDACT_AUTH_TOKENS is set"""
    if not settings.REDACT_AUTH_TOKENS or not isinstance(data, dict):
        return data
    return {key: (REDACTED if key in TOKEN_FIELDS and value else value) for key, value in data.items()}


async def login(
    endpoint: EndpointDescriptor,
    arguments: Dict[str, Any],
    session: Session,
    client: BackendClient
) -> ToolSuccess:
    """POST /auth/login and cache the returned tokens on the session"""
    values = resolve_values(endpoint, arguments)
    response = await send(endpoint, values, None, client)
    data = response.data if isinstance(response.data, dict) else {}
    session.set_tokens(data.get("token"), data.get("refreshToken"))
    logger.info("Session authenticated", extra={"username": values["username"], "tenant_id": values.get("tenantId")})

    expires = data.get("expirationTime")
    return ToolSuccess(
        payload=success(redact_tokens(response.data), {"username": values["username"]}),
        summary=f"Login successful for '{values['username']}'. "
                f"Token expires in {expires if expires is not None else 'N/A'}s.",
    )


async def refresh_token(
    endpoint: EndpointDescriptor,
    arguments: Dict[str, Any],
    session: Session,
    client: BackendClient
) -> ToolSuccess:
    """Rotate both tokens using the given or cached refresh token"""
    token = arguments.get("refreshToken")
    if not is_present(token):
        token = session.refresh_token
    if not token:
        raise ValidationError(
            "Missing refreshToken and no cached refresh token available. "
            "Please provide refreshToken or login first.",
            "refreshToken"
        )

    # Backend reads the raw token as the request body
    response = await client.call(
        endpoint.path,
        endpoint.method,
        operation=endpoint.label,
        content=str(token),
        headers={"Content-Type": "text/plain"},
    )
    data = response.data if isinstance(response.data, dict) else {}
    session.set_tokens(data.get("token") or data.get("accessToken"), data.get("refreshToken"))
    logger.info("Session tokens rotated")

    return ToolSuccess(
        payload=success(redact_tokens(response.data)),
        summary="Token refreshed successfully.",
    )


async def forward(
    endpoint: EndpointDescriptor,
    arguments: Dict[str, Any],
    session: Session,
    client: BackendClient
) -> ToolSuccess:
    """Relay a URL through /forward, or /auth/public-forward when isPublic is set"""
    url = validate_url(arguments["url"])
    is_public = bool(arguments.get("isPublic"))
    headers: Dict[str, str] = {}

    if is_public:
        path = "/auth/public-forward"
        if settings.FORWARD_PUBLIC_ATTACH_TOKEN and session.access_token:
            headers["Authorization"] = f"Bearer {session.access_token}"
    else:
        path = endpoint.path
        token = arguments.get("token") if is_present(arguments.get("token")) else session.access_token
        if not token:
            raise AuthenticationRequiredError()
        headers["Authorization"] = f"Bearer {token}"

    if is_present(arguments.get("brandId")):
        headers["X-Brand-Id"] = str(arguments["brandId"])

    body = {"url": url}
    for key in ("method", "headers", "body"):
        if arguments.get(key) is not None:
            body[key] = arguments[key]

    response = await client.call(path, endpoint.method, operation=endpoint.label, body=body, headers=headers)
    return ToolSuccess(
        payload=success(response.data, {"url": url, "isPublic": is_public}),
        summary=f"Forwarded to {url}.",
    )


async def update_user_profile(
    endpoint: EndpointDescriptor,
    arguments: Dict[str, Any],
    session: Session,
    client: BackendClient
) -> ToolSuccess:
    """PUT only the profile fields the caller supplied"""
    values = resolve_values(endpoint, arguments)
    response = await send(endpoint, values, session, client)
    who = values.get("username") or values.get("id") or "current user"
    return ToolSuccess(
        payload=success(response.data, {"payload": build_body(endpoint, values)}),
        summary=f"Profile updated for {who}.",
    )
