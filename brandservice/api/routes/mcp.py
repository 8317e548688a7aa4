"""
MCP over HTTP
Implements the JSON-RPC 2.0 MCP endpoint plus the plain /list-tools and
/call-tool routes.
"""
import json
import secrets
import time
from typing import Any, Dict, Optional

from fastapi import APIRouter, Header, HTTPException, Request
from fastapi.responses import JSONResponse, Response

from brandservice.config.settings import settings
from brandservice.mcp.catalog import get_endpoint
from brandservice.mcp.schemas import CallToolRequest, ToolListing
from brandservice.mcp.tools import call_tool, list_tools
from brandservice.observability.logging import generate_request_id, get_logger, set_request_id
from brandservice.observability.metrics import get_metrics_collector
from brandservice.services.backend_client import get_backend_client
from brandservice.services.session import Session, get_session_store

router = APIRouter()
logger = get_logger(__name__)

PROTOCOL_VERSION = "2024-11-05"
SESSION_HEADER = "Mcp-Session-Id"


def verify_access(authorization: Optional[str]):
    """Enforce MCP_HTTP_API_KEY when it is configured"""
    expected = settings.MCP_HTTP_API_KEY
    if not expected:
        return
    token = authorization or ""
    if token.startswith("Bearer "):
        token = token[7:]
    if not token or not secrets.compare_digest(token, expected):
        raise HTTPException(status_code=401, detail="Unauthorized: invalid or missing API key")


def resolve_session(session_id: Optional[str]) -> Session:
    return get_session_store().get(session_id)


def _record(endpoint: str, method: str, start_time: float, status_code: int, request_id: str):
    get_metrics_collector().record_endpoint_request(
        endpoint=endpoint,
        method=method,
        duration_ms=(time.time() - start_time) * 1000,
        status_code=status_code,
        request_id=request_id
    )


def _rpc_result(message_id: Any, result: Dict[str, Any]) -> JSONResponse:
    return JSONResponse(content={"jsonrpc": "2.0", "id": message_id, "result": result})


def _rpc_error(message_id: Any, code: int, message: str) -> JSONResponse:
    # JSON-RPC uses 200 even for errors
    return JSONResponse(
        status_code=200,
        content={"jsonrpc": "2.0", "id": message_id, "error": {"code": code, "message": message}}
    )


def _with_session_header(response: Response, session_id: Optional[str]) -> Response:
    if session_id:
        response.headers[SESSION_HEADER] = session_id
    return response


def _is_notification(body: Dict[str, Any]) -> bool:
    method = body.get("method") or ""
    return "id" not in body or method.startswith("notifications/")


async def handle_mcp_request(
    request: Request,
    authorization: Optional[str] = None,
    session_id: Optional[str] = None
) -> Response:
    """Dispatch one JSON-RPC message"""
    request_start_time = time.time()
    request_id = generate_request_id()
    set_request_id(request_id)

    try:
        verify_access(authorization)
    except HTTPException:
        _record("/mcp", "POST", request_start_time, 401, request_id)
        raise

    try:
        body = await request.json()
    except json.JSONDecodeError:
        _record("/mcp", "POST", request_start_time, 400, request_id)
        raise HTTPException(status_code=400, detail="Invalid JSON in request body")

    if not isinstance(body, dict):
        _record("/mcp", "POST", request_start_time, 400, request_id)
        raise HTTPException(status_code=400, detail="JSON-RPC message must be an object")

    # Notifications are acknowledged without a JSON-RPC response
    if _is_notification(body):
        _record("/mcp", "POST", request_start_time, 202, request_id)
        return _with_session_header(Response(status_code=202), session_id)

    method = body.get("method")
    message_id = body.get("id")
    params = body.get("params")
    if params is None:
        params = {}

    if not isinstance(params, dict):
        response = _rpc_error(message_id, -32602, "Invalid params: params must be an object")
    elif method == "initialize":
        session_id = get_session_store().create()
        logger.info("MCP session created", extra={"session_id": session_id})
        response = _rpc_result(message_id, {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {"tools": {}},
            "serverInfo": {"name": settings.SERVER_NAME, "version": settings.VERSION}
        })
    elif method == "ping":
        response = _rpc_result(message_id, {})
    elif method == "tools/list":
        response = _rpc_result(message_id, {"tools": list_tools()})
    elif method == "tools/call":
        tool_name = params.get("name")
        arguments = params.get("arguments")
        if not tool_name:
            response = _rpc_error(message_id, -32602, "Invalid params: tool name is required")
        elif arguments is not None and not isinstance(arguments, dict):
            response = _rpc_error(message_id, -32602, "Invalid params: arguments must be an object")
        else:
            result = await call_tool(
                tool_name,
                arguments or {},
                session=resolve_session(session_id),
                client=get_backend_client()
            )
            response = _rpc_result(message_id, result)
    else:
        response = _rpc_error(message_id, -32601, f"Method not found: {method}")

    _record("/mcp", "POST", request_start_time, response.status_code, request_id)
    return _with_session_header(response, session_id)


@router.post("/mcp")
async def mcp_endpoint(
    request: Request,
    authorization: Optional[str] = Header(None),
    mcp_session_id: Optional[str] = Header(None, alias=SESSION_HEADER)
):
    """
    Main MCP protocol endpoint - handles MCP messages over HTTP

    Supports MCP protocol messages:
    - initialize
    - ping
    - tools/list
    - tools/call

    Notifications (no id, or notifications/*) are acknowledged with 202.
    initialize issues a session id in the Mcp-Session-Id response header.

    Request format (MCP protocol JSON-RPC 2.0):
    {
        "jsonrpc": "2.0",
        "id": 1,
        "method": "tools/list" | "tools/call",
        "params": {...}
    }
    """
    return await handle_mcp_request(request, authorization, mcp_session_id)


@router.delete("/mcp")
async def close_mcp_session(
    authorization: Optional[str] = Header(None),
    mcp_session_id: Optional[str] = Header(None, alias=SESSION_HEADER)
):
    """Drop the session named by the Mcp-Session-Id header and its cached tokens"""
    start_time = time.time()
    request_id = generate_request_id()
    set_request_id(request_id)
    verify_access(authorization)

    if not mcp_session_id:
        _record("/mcp", "DELETE", start_time, 400, request_id)
        raise HTTPException(status_code=400, detail=f"{SESSION_HEADER} header is required")

    if not get_session_store().discard(mcp_session_id):
        _record("/mcp", "DELETE", start_time, 404, request_id)
        raise HTTPException(status_code=404, detail="Unknown session")

    logger.info("MCP session closed", extra={"session_id": mcp_session_id})
    _record("/mcp", "DELETE", start_time, 204, request_id)
    return Response(status_code=204)


@router.get("/mcp/info")
async def mcp_info():
    """Server capabilities and metadata"""
    return JSONResponse(content={
        "name": settings.SERVER_NAME,
        "version": settings.VERSION,
        "protocol_version": PROTOCOL_VERSION,
        "capabilities": {
            "tools": {
                "listChanged": False
            }
        },
        "endpoints": {
            "mcp": "/mcp",
            "info": "/mcp/info",
            "list_tools": "/list-tools",
            "call_tool": "/call-tool"
        },
        "session_header": SESSION_HEADER
    })


@router.get("/list-tools")
async def list_tools_endpoint(authorization: Optional[str] = Header(None)):
    """Tool catalog as {name, description, parameters}"""
    verify_access(authorization)
    return {
        "tools": [
            ToolListing(
                name=tool["name"],
                description=tool["description"],
                parameters=tool["inputSchema"]
            ).model_dump()
            for tool in list_tools()
        ]
    }


@router.post("/call-tool")
async def call_tool_endpoint(
    payload: CallToolRequest,
    authorization: Optional[str] = Header(None),
    mcp_session_id: Optional[str] = Header(None, alias=SESSION_HEADER)
):
    """
    Invoke a tool by name

    Unknown tools answer 404 with the error result body.
    """
    start_time = time.time()
    request_id = generate_request_id()
    set_request_id(request_id)
    verify_access(authorization)

    if not payload.name:
        _record("/call-tool", "POST", start_time, 400, request_id)
        raise HTTPException(status_code=400, detail="Tool name is required")

    result = await call_tool(
        payload.name,
        payload.arguments,
        session=resolve_session(mcp_session_id),
        client=get_backend_client()
    )
    status_code = 404 if get_endpoint(payload.name) is None else 200
    _record("/call-tool", "POST", start_time, status_code, request_id)
    return JSONResponse(status_code=status_code, content=result)
