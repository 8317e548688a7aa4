"""
FastAPI application initialization
"""
import sys

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from brandservice.api.routes import mcp, metrics
from brandservice.config.settings import settings, validate_environment
from brandservice.observability.logging import get_logger, setup_logging
from brandservice.utils.exceptions import ConfigurationError

# Setup structured logging
setup_logging(
    level="DEBUG" if settings.DEBUG else settings.LOG_LEVEL,
    log_file=settings.LOG_FILE
)

logger = get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="""
    MCP adapter for the brand-service REST backend.

    ## API Endpoints

    * `/list-tools` - Tool catalog
    * `/call-tool` - Invoke a tool with `{name, arguments}`
    * `/mcp` - MCP protocol endpoint (JSON-RPC 2.0)
    * `/api/v1/metrics` - Prometheus metrics
    * `/health` - Health check

    Tool sessions are keyed by the `Mcp-Session-Id` header, which `initialize`
    issues and `DELETE /mcp` closes. When
    `MCP_HTTP_API_KEY` is set, requests need `Authorization: Bearer <key>`.
    """,
    version=settings.VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=[
        {
            "name": "mcp",
            "description": "MCP tools over HTTP"
        },
        {
            "name": "metrics",
            "description": "Prometheus-compatible metrics"
        }
    ]
)


@app.on_event("startup")
async def startup_event():
    """Refuse to start without backend configuration"""
    validate_environment()
    logger.info("Brand service MCP HTTP server started", extra={"api_base_url": settings.API_BASE_URL})


# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.DEBUG else settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(
    mcp.router,
    tags=["mcp"]
)

app.include_router(
    metrics.router,
    prefix="/api/v1",
    tags=["metrics"]
)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": f"{settings.APP_NAME} API",
        "version": settings.VERSION,
        "docs": "/docs",
        "mcp_endpoint": "/mcp",
        "list_tools": "/list-tools",
        "call_tool": "/call-tool"
    }


def run():
    """Console entry point"""
    try:
        validate_environment()
    except ConfigurationError as e:
        logger.critical(e.message)
        sys.exit(1)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    run()
