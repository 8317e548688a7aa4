"""
Observability module for logging and metrics
"""
from brandservice.observability.logging import get_logger, setup_logging
from brandservice.observability.metrics import MetricsCollector, get_metrics_collector

__all__ = [
    "get_logger",
    "setup_logging",
    "MetricsCollector",
    "get_metrics_collector",
]
