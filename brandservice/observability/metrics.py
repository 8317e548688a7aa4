"""
Metrics collection for Prometheus/Grafana
"""
from typing import Dict, Any, Optional
from collections import defaultdict
from datetime import datetime, timezone
from threading import Lock
from brandservice.observability.logging import get_logger, get_request_id

logger = get_logger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class MetricsCollector:
    """Collects metrics for observability"""

    def __init__(self):
        self._lock = Lock()
        self._metrics = defaultdict(lambda: {
            "count": 0,
            "total_latency_ms": 0.0,
            "errors": 0,
            "last_updated": None
        })

    def _record(self, key: str, duration_ms: float, success: bool):
        with self._lock:
            metric = self._metrics[key]
            metric["count"] += 1
            metric["total_latency_ms"] += duration_ms
            if not success:
                metric["errors"] += 1
            metric["last_updated"] = _now()

    def record_tool_invocation(
        self,
        tool_name: str,
        duration_ms: float,
        success: bool,
        request_id: Optional[str] = None
    ):
        """Record MCP tool invocation"""
        self._record(f"tool_{tool_name}", duration_ms, success)

        logger.info(
            "Tool invocation",
            extra={
                "tool_name": tool_name,
                "duration_ms": duration_ms,
                "success": success,
                "request_id": request_id or get_request_id(),
                "metric_type": "tool_invocation"
            }
        )

    def record_backend_call(
        self,
        method: str,
        path: str,
        duration_ms: float,
        status_code: Optional[int],
        request_id: Optional[str] = None
    ):
        """Record an outbound call to the brand backend. status_code is None when no response arrived."""
        success = status_code is not None and 200 <= status_code < 300
        self._record(f"backend_{method}", duration_ms, success)

        logger.info(
            "Backend call",
            extra={
                "method": method,
                "path": path,
                "duration_ms": duration_ms,
                "status_code": status_code,
                "success": success,
                "request_id": request_id or get_request_id(),
                "metric_type": "backend_call"
            }
        )

    def record_endpoint_request(
        self,
        endpoint: str,
        method: str,
        duration_ms: float,
        status_code: int,
        request_id: Optional[str] = None
    ):
        """Record API endpoint request"""
        success = 200 <= status_code < 300
        self._record(f"endpoint_{method}_{endpoint}", duration_ms, success)

        logger.info(
            "Endpoint request",
            extra={
                "endpoint": endpoint,
                "method": method,
                "duration_ms": duration_ms,
                "status_code": status_code,
                "success": success,
                "request_id": request_id or get_request_id(),
                "metric_type": "endpoint_request"
            }
        )

    def record_error(
        self,
        error_type: str,
        error_message: str,
        context: Optional[Dict[str, Any]] = None,
        request_id: Optional[str] = None
    ):
        """Record error occurrence"""
        with self._lock:
            metric = self._metrics[f"error_{error_type}"]
            metric["count"] += 1
            metric["errors"] += 1
            metric["last_updated"] = _now()

        log_data = {
            "error_type": error_type,
            "error_message": error_message,
            "request_id": request_id or get_request_id(),
            "metric_type": "error"
        }
        if context:
            log_data.update(context)

        logger.error("Error occurred", extra=log_data)

    def get_metrics(self) -> Dict[str, Any]:
        """Get all metrics"""
        with self._lock:
            return {name: dict(data) for name, data in self._metrics.items()}

    def reset(self):
        """Drop every recorded metric"""
        with self._lock:
            self._metrics.clear()

    def _sanitize_metric_name(self, name: str) -> str:
        """Sanitize metric name for Prometheus: [a-zA-Z_:][a-zA-Z0-9_:]*"""
        sanitized = name.replace("/", "_").replace("-", "_")
        while "__" in sanitized:
            sanitized = sanitized.replace("__", "_")
        return sanitized

    def get_prometheus_format(self) -> str:
        """Get metrics in Prometheus format"""
        lines = []
        with self._lock:
            for metric_name, data in self._metrics.items():
                sanitized_name = self._sanitize_metric_name(metric_name)

                lines.append(f"# TYPE {sanitized_name}_count counter")
                lines.append(f"{sanitized_name}_count {data['count']}")

                avg_latency = data["total_latency_ms"] / data["count"] if data["count"] > 0 else 0
                lines.append(f"# TYPE {sanitized_name}_latency_ms gauge")
                lines.append(f"{sanitized_name}_latency_ms {avg_latency}")

                lines.append(f"# TYPE {sanitized_name}_errors counter")
                lines.append(f"{sanitized_name}_errors {data['errors']}")

        return "\n".join(lines)


# Global metrics collector instance
_metrics_collector: Optional[MetricsCollector] = None


def get_metrics_collector() -> MetricsCollector:
    """Get global metrics collector instance"""
    global _metrics_collector
    if _metrics_collector is None:
        _metrics_collector = MetricsCollector()
    return _metrics_collector
