"""
Unit tests for metrics route and collector
"""
import pytest
from unittest.mock import patch, MagicMock
from fastapi.testclient import TestClient
from brandservice.api.main import app
from brandservice.observability.metrics import MetricsCollector


class TestMetricsEndpoint:
    """Tests for /metrics endpoint"""

    def test_metrics_endpoint_success(self):
        """Test successful metrics endpoint"""
        client = TestClient(app)

        with patch('brandservice.api.routes.metrics.get_metrics_collector') as mock_get:
            mock_collector = MagicMock()
            mock_collector.get_prometheus_format.return_value = "# TYPE tool_login_count counter\ntool_login_count 1\n"
            mock_get.return_value = mock_collector

            response = client.get("/api/v1/metrics")

            assert response.status_code == 200
            # FastAPI adds charset=utf-8 automatically
            assert "text/plain; version=0.0.4" in response.headers["content-type"]
            assert "tool_login_count" in response.text

    def test_metrics_endpoint_empty_metrics(self):
        """Test metrics endpoint with empty metrics"""
        client = TestClient(app)

        with patch('brandservice.api.routes.metrics.get_metrics_collector') as mock_get:
            mock_collector = MagicMock()
            mock_collector.get_prometheus_format.return_value = ""
            mock_get.return_value = mock_collector

            response = client.get("/api/v1/metrics")

            assert response.status_code == 200
            assert response.text == ""


class TestMetricsJSONEndpoint:
    """Tests for /metrics/json endpoint"""

    def test_metrics_json_endpoint_success(self):
        """Test successful metrics JSON endpoint"""
        client = TestClient(app)

        with patch('brandservice.api.routes.metrics.get_metrics_collector') as mock_get:
            mock_collector = MagicMock()
            mock_collector.get_metrics.return_value = {
                "tool_getBrandDetailsById": {
                    "count": 10,
                    "total_latency_ms": 100.0,
                    "errors": 2,
                    "last_updated": "2024-01-01T00:00:00"
                }
            }
            mock_get.return_value = mock_collector

            response = client.get("/api/v1/metrics/json")

            assert response.status_code == 200
            data = response.json()
            metric = data["metrics"]["tool_getBrandDetailsById"]
            assert metric["count"] == 10
            assert metric["average_latency_ms"] == 10.0
            assert metric["success_rate"] == 80.0

    def test_metrics_json_endpoint_zero_count(self):
        """Test metrics JSON endpoint with zero count"""
        client = TestClient(app)

        with patch('brandservice.api.routes.metrics.get_metrics_collector') as mock_get:
            mock_collector = MagicMock()
            mock_collector.get_metrics.return_value = {
                "backend_GET": {
                    "count": 0,
                    "total_latency_ms": 0.0,
                    "errors": 0,
                    "last_updated": None
                }
            }
            mock_get.return_value = mock_collector

            response = client.get("/api/v1/metrics/json")

            data = response.json()
            assert data["metrics"]["backend_GET"]["average_latency_ms"] == 0
            assert data["metrics"]["backend_GET"]["success_rate"] == 100.0

    def test_metrics_json_endpoint_empty_metrics(self):
        """Test metrics JSON endpoint with empty metrics"""
        client = TestClient(app)

        with patch('brandservice.api.routes.metrics.get_metrics_collector') as mock_get:
            mock_collector = MagicMock()
            mock_collector.get_metrics.return_value = {}
            mock_get.return_value = mock_collector

            response = client.get("/api/v1/metrics/json")

            data = response.json()
            assert data["summary"]["total_metrics"] == 0
            assert data["summary"]["total_invocations"] == 0
            assert data["summary"]["overall_success_rate"] == 100.0

    def test_metrics_json_endpoint_multiple_metrics(self):
        """Test metrics JSON endpoint with multiple metrics"""
        client = TestClient(app)

        with patch('brandservice.api.routes.metrics.get_metrics_collector') as mock_get:
            mock_collector = MagicMock()
            mock_collector.get_metrics.return_value = {
                "tool_login": {"count": 10, "total_latency_ms": 100.0, "errors": 1, "last_updated": None},
                "backend_POST": {"count": 20, "total_latency_ms": 200.0, "errors": 2, "last_updated": None}
            }
            mock_get.return_value = mock_collector

            response = client.get("/api/v1/metrics/json")

            data = response.json()
            assert data["summary"]["total_metrics"] == 2
            assert data["summary"]["total_invocations"] == 30
            assert data["summary"]["total_errors"] == 3
            assert data["summary"]["overall_success_rate"] == 90.0


class TestMetricsCollector:
    """Tests for MetricsCollector"""

    def test_record_tool_invocation(self):
        collector = MetricsCollector()
        collector.record_tool_invocation("login", 12.0, True)
        collector.record_tool_invocation("login", 8.0, False)

        metric = collector.get_metrics()["tool_login"]
        assert metric["count"] == 2
        assert metric["errors"] == 1
        assert metric["total_latency_ms"] == 20.0
        assert metric["last_updated"] is not None

    @pytest.mark.parametrize("status_code, errors", [(200, 0), (204, 0), (404, 1), (None, 1)])
    def test_record_backend_call(self, status_code, errors):
        collector = MetricsCollector()
        collector.record_backend_call("GET", "/api/brands", 5.0, status_code)
        assert collector.get_metrics()["backend_GET"]["errors"] == errors

    def test_record_error(self):
        collector = MetricsCollector()
        collector.record_error("tool_call", "boom", context={"tool_name": "login"})
        metric = collector.get_metrics()["error_tool_call"]
        assert metric["count"] == 1
        assert metric["errors"] == 1

    def test_prometheus_format_sanitizes_names(self):
        collector = MetricsCollector()
        collector.record_endpoint_request("/call-tool", "POST", 10.0, 200)

        text = collector.get_prometheus_format()
        assert "endpoint_POST_call_tool_count 1" in text
        assert "# TYPE endpoint_POST_call_tool_latency_ms gauge" in text
        assert "endpoint_POST_call_tool_errors 0" in text

    def test_reset(self):
        collector = MetricsCollector()
        collector.record_tool_invocation("login", 1.0, True)
        collector.reset()
        assert collector.get_metrics() == {}
        assert collector.get_prometheus_format() == ""
