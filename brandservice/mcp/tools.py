"""
MCP tool dispatch and result rendering
"""
import json
import time
from typing import Dict, Any, List, Optional

from brandservice.mcp.catalog import get_endpoint, list_tools, tool_names
from brandservice.mcp.endpoints import execute_endpoint
from brandservice.mcp.schemas import ToolSuccess
from brandservice.observability.logging import get_logger
from brandservice.observability.metrics import get_metrics_collector
from brandservice.services.backend_client import BackendClient, get_backend_client
from brandservice.services.session import Session, get_session_store
from brandservice.utils.exceptions import (
    AuthenticationRequiredError,
    LocalRequestError,
    MCPToolError,
    NetworkError,
    UpstreamHttpError,
    UpstreamTimeoutError,
    ValidationError,
)

__all__ = ["list_tools", "call_tool", "render_success", "render_failure"]

logger = get_logger(__name__)

RAW_JSON_START = "RAW_JSON_START"
RAW_JSON_END = "RAW_JSON_END"
BASE64_START = "BASE64_START"
BASE64_END = "BASE64_END"


def _text(text: str) -> Dict[str, str]:
    return {"type": "text", "text": text}


def render_success(outcome: ToolSuccess) -> Dict[str, Any]:
    """Raw JSON block, summary line, then the base64 block for binary tools"""
    content: List[Dict[str, str]] = [
        _text(f"{RAW_JSON_START}\n{json.dumps(outcome.payload, indent=2, default=str)}\n{RAW_JSON_END}"),
        _text(outcome.summary),
    ]
    if outcome.binary_base64 is not None:
        content.append(_text(f"{BASE64_START}\n{outcome.binary_base64}\n{BASE64_END}"))
    return {"content": content, "isError": False}


def render_failure(text: str) -> Dict[str, Any]:
    return {"content": [_text(text)], "isError": True}


async def call_tool(
    name: str,
    arguments: Optional[Dict[str, Any]] = None,
    session: Optional[Session] = None,
    client: Optional[BackendClient] = None
) -> Dict[str, Any]:
    """
    Execute an MCP tool by name with given arguments

    Args:
        name: Tool name to execute
        arguments: Tool arguments
        session: Token state for the calling connection. Defaults to the process session.
        client: Backend client. Defaults to the one built from settings.

    Returns:
        Dict with 'content' (list of text blocks) and 'isError' (bool)

    Raises:
        ConfigurationError: only when no client is given and settings are incomplete
    """
    session = session if session is not None else get_session_store().get()
    client = client if client is not None else get_backend_client()
    metrics = get_metrics_collector()

    start_time = time.time()
    result: Dict[str, Any]
    try:
        endpoint = get_endpoint(name)
        if endpoint is None:
            raise MCPToolError(name, f"Unknown tool '{name}'. Available tools: {', '.join(tool_names())}")
        outcome = await execute_endpoint(endpoint, arguments, session, client)
        result = render_success(outcome)

    except ValidationError as e:
        result = render_failure(f"Validation error in tool '{name}': {e.message}")
    except AuthenticationRequiredError as e:
        result = render_failure(f"Authentication required for tool '{name}': {e.message}")
    except UpstreamHttpError as e:
        result = render_failure(f"Upstream error in tool '{name}': {e.message}")
    except UpstreamTimeoutError as e:
        result = render_failure(f"Timeout in tool '{name}': {e.message}")
    except NetworkError as e:
        result = render_failure(f"Network error in tool '{name}': {e.message}")
    except LocalRequestError as e:
        result = render_failure(f"Request error in tool '{name}': {e.message}")
    except MCPToolError as e:
        result = render_failure(f"MCP tool error: {e.message}")
    except Exception as e:
        logger.error(f"Unexpected error in tool '{name}'", exc_info=True)
        result = render_failure(f"Unexpected error in tool '{name}': {str(e)}")

    duration_ms = (time.time() - start_time) * 1000
    metrics.record_tool_invocation(tool_name=name, duration_ms=duration_ms, success=not result["isError"])
    if result["isError"]:
        metrics.record_error(
            error_type="tool_call",
            error_message=result["content"][0]["text"],
            context={"tool_name": name}
        )
    return result
