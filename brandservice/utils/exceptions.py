"""
Custom exception classes for the application
"""
from typing import Optional


class BrandServiceError(Exception):
    """Base exception for all application errors"""
    def __init__(self, message: str, error_code: Optional[str] = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class ConfigurationError(BrandServiceError):
    """Missing or invalid process configuration"""
    def __init__(self, message: str):
        super().__init__(message, error_code="CONFIG_ERROR")


class ValidationError(BrandServiceError):
    """Input validation errors"""
    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message, error_code="VALIDATION_ERROR")


class AuthenticationRequiredError(BrandServiceError):
    """Tool needs a bearer token and the session has none"""
    def __init__(self, message: str = "Not authenticated. Please login first to obtain a token."):
        super().__init__(message, error_code="AUTH_REQUIRED")


class BackendError(BrandServiceError):
    """Outbound call to the brand backend failed"""
    def __init__(self, message: str, error_code: str = "BACKEND_ERROR", original_error: Optional[Exception] = None):
        self.original_error = original_error
        super().__init__(message, error_code=error_code)


class UpstreamHttpError(BackendError):
    """Backend answered with a non-2xx status"""
    def __init__(self, operation: str, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{operation} failed ({status_code}): {detail}", error_code="UPSTREAM_HTTP_ERROR")


class NetworkError(BackendError):
    """No response was received from the backend"""
    def __init__(self, url: str, original_error: Optional[Exception] = None):
        self.url = url
        super().__init__(
            f"Network Error: Unable to reach API at {url}",
            error_code="NETWORK_ERROR",
            original_error=original_error
        )


class UpstreamTimeoutError(BackendError):
    """Backend did not answer within the configured timeout"""
    def __init__(self, operation: str, timeout_ms: int, original_error: Optional[Exception] = None):
        self.timeout_ms = timeout_ms
        super().__init__(
            f"{operation} request timeout after {timeout_ms}ms",
            error_code="UPSTREAM_TIMEOUT",
            original_error=original_error
        )


class LocalRequestError(BackendError):
    """Request could not be built or sent"""
    def __init__(self, operation: str, cause: str, original_error: Optional[Exception] = None):
        super().__init__(
            f"{operation} request failed: {cause}",
            error_code="LOCAL_REQUEST_ERROR",
            original_error=original_error
        )


class MCPToolError(BrandServiceError):
    """MCP tool execution errors"""
    def __init__(self, tool_name: str, message: str, original_error: Optional[Exception] = None):
        self.tool_name = tool_name
        self.original_error = original_error
        super().__init__(f"Tool '{tool_name}': {message}", error_code="MCP_TOOL_ERROR")


class ToolResultError(BrandServiceError):
    """Error-flagged tool result handed to the stdio SDK"""
    def __init__(self, message: str):
        super().__init__(message, error_code="TOOL_RESULT_ERROR")
