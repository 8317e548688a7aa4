"""
Declarative endpoint descriptors

Each MCP tool is one EndpointDescriptor: where it goes on the backend, which
arguments land in the path, query or body, whether a bearer token is needed,
and how the result is summarised. execute_endpoint turns a descriptor plus
call arguments into exactly one backend request.
"""
import base64
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple
from urllib.parse import quote

from brandservice.mcp.schemas import ToolSuccess
from brandservice.services.backend_client import BackendClient, BackendResponse
from brandservice.services.session import Session
from brandservice.utils.exceptions import AuthenticationRequiredError, ValidationError

PATH = "path"
QUERY = "query"
BODY = "body"

JSON = "json"
BINARY = "binary"

# Identifiers arrive as strings or numbers depending on the client
ID_SCHEMA_TYPE = ["string", "integer"]


@dataclass(frozen=True)
class Param:
    """One tool argument and where it is sent"""
    name: str
    schema: Dict[str, Any]
    location: str = QUERY
    required: bool = False
    default: Any = None
    echo: bool = False
    echo_as: Optional[str] = None
    omit_blank: bool = False


def path_param(name: str, description: str, echo: bool = True) -> Param:
    return Param(name, {"type": ID_SCHEMA_TYPE, "description": description}, PATH, required=True, echo=echo)


def query_param(name: str, schema: Dict[str, Any], required: bool = False, default: Any = None,
                echo: bool = False, echo_as: Optional[str] = None, omit_blank: bool = False) -> Param:
    return Param(name, schema, QUERY, required, default, echo, echo_as, omit_blank)


def body_param(name: str, schema: Dict[str, Any], required: bool = False, echo: bool = False) -> Param:
    return Param(name, schema, BODY, required, echo=echo)


SummaryFn = Callable[[Dict[str, Any], Dict[str, Any]], str]
PrepareFn = Callable[[Dict[str, Any]], Dict[str, Any]]
HandlerFn = Callable[["EndpointDescriptor", Dict[str, Any], Session, BackendClient], Awaitable[ToolSuccess]]


@dataclass(frozen=True)
class EndpointDescriptor:
    """Static description of one backend operation exposed as a tool"""
    name: str
    description: str
    method: str
    path: str
    label: str
    params: Tuple[Param, ...] = ()
    # Required unless a handler builds its own summary
    summary: Optional[SummaryFn] = None
    requires_auth: bool = True
    accepts_arguments: bool = True
    response_kind: str = JSON
    empty_body: bool = False
    use_api_key: bool = False
    prepare: Optional[PrepareFn] = None
    handler: Optional[HandlerFn] = None
    extra_schema: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.summary is None and self.handler is None:
            raise ValueError(f"Endpoint {self.name} needs a summary or a handler")

    @property
    def required(self) -> List[str]:
        return [p.name for p in self.params if p.required]

    def input_schema(self) -> Dict[str, Any]:
        properties = {}
        for param in self.params:
            schema = dict(param.schema)
            if param.default is not None and "default" not in schema:
                schema["default"] = param.default
            properties[param.name] = schema
        schema = {"type": "object", "properties": properties}
        if self.required:
            schema["required"] = self.required
        if not self.accepts_arguments:
            schema["additionalProperties"] = False
        schema.update(self.extra_schema)
        return schema

    def to_tool(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema(),
        }


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def is_present(value: Any) -> bool:
    """0 and False count as present; None, blank strings and empty collections do not"""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, dict)):
        return len(value) > 0
    return True


def require_fields(arguments: Dict[str, Any], names: List[str]):
    missing = [name for name in names if not is_present(arguments.get(name))]
    if len(missing) == 1:
        raise ValidationError(f"Missing required input: {missing[0]}", missing[0])
    if missing:
        raise ValidationError(f"Missing required inputs: {', '.join(missing)}", missing[0])


def require_session(session: Session):
    if not session.is_authenticated:
        raise AuthenticationRequiredError()


def check_preconditions(endpoint: EndpointDescriptor, arguments: Dict[str, Any], session: Session):
    """
    Validate a call before any I/O

    Raises:
        ValidationError: unexpected, missing or malformed arguments
        AuthenticationRequiredError: tool needs a token and the session has none
    """
    if not endpoint.accepts_arguments and arguments:
        raise ValidationError(f"{endpoint.name} does not accept any arguments")

    if endpoint.requires_auth:
        require_session(session)

    require_fields(arguments, endpoint.required)

    for param in endpoint.params:
        value = arguments.get(param.name)
        if not is_present(value):
            continue
        allowed = param.schema.get("enum")
        if allowed and value not in allowed:
            raise ValidationError(
                f"Invalid value for '{param.name}': {value}. Expected one of: {', '.join(allowed)}",
                param.name
            )
        if param.schema.get("type") == "array" and not isinstance(value, list):
            raise ValidationError(f"'{param.name}' must be an array", param.name)


def resolve_values(endpoint: EndpointDescriptor, arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Argument values with defaults applied and blank optionals dropped"""
    values = {}
    for param in endpoint.params:
        value = arguments.get(param.name)
        if param.omit_blank and isinstance(value, str) and not value.strip():
            value = None
        if value is None:
            value = param.default
        values[param.name] = value
    return values


def build_path(endpoint: EndpointDescriptor, values: Dict[str, Any]) -> str:
    path = endpoint.path
    for param in endpoint.params:
        if param.location == PATH:
            path = path.replace("{" + param.name + "}", quote(str(values[param.name]), safe=""))
    return path


def build_query(endpoint: EndpointDescriptor, values: Dict[str, Any]) -> Dict[str, Any]:
    return {
        p.name: values[p.name]
        for p in endpoint.params
        if p.location == QUERY and values[p.name] is not None
    }


def build_body(endpoint: EndpointDescriptor, values: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    body_params = [p for p in endpoint.params if p.location == BODY]
    if not body_params:
        return {} if endpoint.empty_body else None
    return {p.name: values[p.name] for p in body_params if values[p.name] is not None}


def echo_fields(endpoint: EndpointDescriptor, values: Dict[str, Any]) -> Dict[str, Any]:
    return {p.echo_as or p.name: values[p.name] for p in endpoint.params if p.echo}


async def send(
    endpoint: EndpointDescriptor,
    values: Dict[str, Any],
    session: Optional[Session],
    client: BackendClient,
    headers: Optional[Dict[str, str]] = None
) -> BackendResponse:
    """Issue the descriptor's request with resolved argument values"""
    return await client.call(
        build_path(endpoint, values),
        endpoint.method,
        operation=endpoint.label,
        body=build_body(endpoint, values),
        query=build_query(endpoint, values),
        headers=headers,
        session=session,
        response_kind=endpoint.response_kind,
        use_api_key=endpoint.use_api_key,
    )


def success(payload_data: Any, echo: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Standard success payload: success, data, echoed inputs, timestamp"""
    payload = {"success": True, "data": payload_data}
    payload.update(echo or {})
    payload["timestamp"] = utc_timestamp()
    return payload


async def execute_endpoint(
    endpoint: EndpointDescriptor,
    arguments: Optional[Dict[str, Any]],
    session: Session,
    client: BackendClient
) -> ToolSuccess:
    """Validate, call the backend once, and shape the success payload"""
    arguments = dict(arguments or {})
    check_preconditions(endpoint, arguments, session)
    if endpoint.prepare is not None:
        arguments = endpoint.prepare(arguments)
    if endpoint.handler is not None:
        return await endpoint.handler(endpoint, arguments, session, client)

    values = resolve_values(endpoint, arguments)
    response = await send(endpoint, values, session, client)

    if endpoint.response_kind == BINARY:
        payload = {"success": True}
        payload.update(echo_fields(endpoint, values))
        payload["contentType"] = response.content_type
        payload["contentDisposition"] = response.content_disposition
        payload["timestamp"] = utc_timestamp()
        return ToolSuccess(
            payload=payload,
            summary=endpoint.summary(payload, values),
            binary_base64=base64.b64encode(response.content).decode("ascii"),
        )

    payload = success(response.data, echo_fields(endpoint, values))
    return ToolSuccess(payload=payload, summary=endpoint.summary(payload, values))
