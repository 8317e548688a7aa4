"""
Metrics endpoint for Prometheus scraping
"""
from fastapi import APIRouter
from fastapi.responses import Response, JSONResponse
from brandservice.observability.metrics import get_metrics_collector

router = APIRouter()


@router.get("/metrics")
async def metrics_endpoint():
    """
    Prometheus metrics endpoint
    Exposes metrics in Prometheus format for scraping
    """
    metrics = get_metrics_collector()
    return Response(
        content=metrics.get_prometheus_format(),
        media_type="text/plain; version=0.0.4"
    )


@router.get("/metrics/json")
async def metrics_json_endpoint():
    """Collected tool, backend and endpoint metrics with derived latency and success rate"""
    all_metrics = get_metrics_collector().get_metrics()

    formatted_metrics = {}
    for metric_name, data in all_metrics.items():
        count = data["count"]
        formatted_metrics[metric_name] = {
            "count": count,
            "total_latency_ms": data["total_latency_ms"],
            "average_latency_ms": round(data["total_latency_ms"] / count, 2) if count > 0 else 0,
            "errors": data["errors"],
            "success_rate": round((count - data["errors"]) / count * 100, 2) if count > 0 else 100.0,
            "last_updated": data["last_updated"]
        }

    total_count = sum(m["count"] for m in formatted_metrics.values())
    total_errors = sum(m["errors"] for m in formatted_metrics.values())
    return JSONResponse(content={
        "metrics": formatted_metrics,
        "summary": {
            "total_metrics": len(formatted_metrics),
            "total_invocations": total_count,
            "total_errors": total_errors,
            "overall_success_rate": round((total_count - total_errors) / total_count * 100, 2) if total_count > 0 else 100.0
        }
    })
