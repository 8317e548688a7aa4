"""
Unit tests for custom exception classes
"""
import pytest
from brandservice.utils.exceptions import (
    BrandServiceError,
    ConfigurationError,
    ValidationError,
    AuthenticationRequiredError,
    BackendError,
    UpstreamHttpError,
    NetworkError,
    UpstreamTimeoutError,
    LocalRequestError,
    MCPToolError,
    ToolResultError
)


class TestBrandServiceError:
    """Tests for base exception class"""

    def test_base_exception_creation(self):
        """Test creating base exception"""
        error = BrandServiceError("Test error", "TEST_CODE")
        assert str(error) == "Test error"
        assert error.message == "Test error"
        assert error.error_code == "TEST_CODE"

    def test_base_exception_without_code(self):
        """Test creating base exception without error code"""
        error = BrandServiceError("Test error")
        assert error.message == "Test error"
        assert error.error_code is None

    def test_base_exception_can_be_raised(self):
        """Test that base exception can be raised and caught"""
        with pytest.raises(BrandServiceError) as exc_info:
            raise BrandServiceError("Test error")
        assert str(exc_info.value) == "Test error"


class TestLocalErrors:
    """Tests for errors raised before any request is sent"""

    def test_configuration_error(self):
        error = ConfigurationError("Missing required environment variables: API_KEY")
        assert error.error_code == "CONFIG_ERROR"
        assert isinstance(error, BrandServiceError)

    def test_validation_error_with_field(self):
        """Test validation error keeps the offending field"""
        error = ValidationError("Missing required input: id", field="id")
        assert error.field == "id"
        assert error.error_code == "VALIDATION_ERROR"

    def test_validation_error_without_field(self):
        error = ValidationError("Invalid input")
        assert error.field is None

    def test_authentication_required_default_message(self):
        """Test the not-authenticated message"""
        error = AuthenticationRequiredError()
        assert error.message == "Not authenticated. Please login first to obtain a token."
        assert error.error_code == "AUTH_REQUIRED"


class TestBackendErrors:
    """Tests for the backend failure family"""

    def test_upstream_http_error_message(self):
        """Test status and detail are both in the message"""
        error = UpstreamHttpError("Get brand by ID", 404, "Brand not found")
        assert error.message == "Get brand by ID failed (404): Brand not found"
        assert error.status_code == 404
        assert error.detail == "Brand not found"
        assert isinstance(error, BackendError)

    def test_network_error_message(self):
        error = NetworkError("http://backend.test/api/brands")
        assert error.message == "Network Error: Unable to reach API at http://backend.test/api/brands"
        assert error.error_code == "NETWORK_ERROR"

    def test_timeout_error_message(self):
        error = UpstreamTimeoutError("Search brands", 15000)
        assert error.message == "Search brands request timeout after 15000ms"
        assert error.timeout_ms == 15000

    def test_local_request_error_keeps_original(self):
        """Test original exception is preserved"""
        original = ValueError("bad header")
        error = LocalRequestError("Login", "bad header", original)
        assert error.message == "Login request failed: bad header"
        assert error.original_error is original

    def test_kinds_are_distinct(self):
        """Test the four failure kinds do not subclass each other"""
        kinds = [UpstreamHttpError, NetworkError, UpstreamTimeoutError, LocalRequestError]
        for kind in kinds:
            for other in kinds:
                if kind is not other:
                    assert not issubclass(kind, other)


class TestToolErrors:
    """Tests for tool-level errors"""

    def test_mcp_tool_error(self):
        """Test creating MCP tool error"""
        error = MCPToolError("nope", "Unknown tool 'nope'")
        assert error.tool_name == "nope"
        assert error.message == "Tool 'nope': Unknown tool 'nope'"
        assert error.error_code == "MCP_TOOL_ERROR"

    def test_tool_result_error(self):
        error = ToolResultError("Validation error in tool 'login': Missing required input: password")
        assert "Missing required input" in str(error)
