"""
MCP tool input/output schemas
"""
from pydantic import BaseModel, Field
from typing import Optional, Dict, Any


class ToolSuccess(BaseModel):
    """Successful handler outcome before rendering into content blocks"""
    payload: Dict[str, Any]
    summary: str
    binary_base64: Optional[str] = None


class CallToolRequest(BaseModel):
    """Body of POST /call-tool"""
    name: Optional[str] = Field(None, description="Tool name from /list-tools")
    arguments: Optional[Dict[str, Any]] = Field(None, description="Tool arguments")


class ToolListing(BaseModel):
    """Tool entry of GET /list-tools"""
    name: str
    description: str
    parameters: Dict[str, Any]
