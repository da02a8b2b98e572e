import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from odds_gateway import __version__
from odds_gateway.api.deps import get_metrics
from odds_gateway.api.routes import catalog, markets, parlay, scan
from odds_gateway.config import settings
from odds_gateway.exceptions import (
    ConfigurationError,
    InvalidInput,
    MalformedEvent,
    OddsGatewayError,
    UpstreamError,
    UpstreamMalformedResponse,
    UpstreamTimeout,
    UpstreamUnavailable,
)
from odds_gateway.services.cache import TTLCache
from odds_gateway.services.metrics import MetricsService
from odds_gateway.services.odds_client import OddsAPIClient

logging.basicConfig(level=settings.log_level)
# httpx logs full request URLs, which carry the credential in query mode
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)

PUBLIC_PATHS = ("/health", "/docs", "/openapi.json", "/redoc")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting odds-gateway service")
    if not settings.odds_api_key:
        logger.warning("ODDS_API_KEY is not set; upstream routes will fail")
    app.state.metrics = MetricsService()
    app.state.cache = TTLCache(settings.cache_ttl, max_entries=settings.cache_max_entries)
    app.state.odds_client = OddsAPIClient(app.state.cache, metrics=app.state.metrics)
    yield
    # Shutdown
    await app.state.cache.clear()
    logger.info("Shutting down odds-gateway service")


app = FastAPI(
    title="odds-gateway",
    description="Read-only gateway for sports odds with parlay pricing",
    version=__version__,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_methods=["GET"],
    allow_headers=["*"],
    max_age=600,
)


# API Key authentication middleware
@app.middleware("http")
async def api_key_middleware(request: Request, call_next):
    """Validate API key if one is configured."""
    if request.url.path in PUBLIC_PATHS or not settings.api_key:
        return await call_next(request)

    if request.headers.get("X-API-Key") != settings.api_key:
        return JSONResponse(
            status_code=401,
            content={"error": "UNAUTHORIZED", "message": "Invalid or missing API key", "details": {}},
        )

    return await call_next(request)


# Metrics middleware
@app.middleware("http")
async def metrics_middleware(request: Request, call_next):
    """Track request metrics."""
    metrics: MetricsService | None = getattr(request.app.state, "metrics", None)
    if metrics is None or request.url.path in ("/health", "/metrics"):
        return await call_next(request)

    start_time = time.time()
    metrics.track_request()

    try:
        response = await call_next(request)
    except Exception:
        metrics.track_error()
        raise
    finally:
        metrics.track_latency((time.time() - start_time) * 1000)

    if response.status_code >= 400:
        metrics.track_error()

    return response


# Exception handlers
@app.exception_handler(404)
async def not_found_handler(request: Request, exc: Exception):
    return JSONResponse(
        status_code=404,
        content={
            "error": "NOT_FOUND",
            "message": f"No route: {request.method} {request.url.path}",
            "details": {},
        },
    )


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput):
    logger.info(f"Invalid input: {exc.message} - {exc.details}")
    return JSONResponse(status_code=400, content=exc.to_dict())


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error(f"Configuration error: {exc.message}")
    return JSONResponse(status_code=500, content=exc.to_dict())


@app.exception_handler(UpstreamError)
async def upstream_error_handler(request: Request, exc: UpstreamError):
    logger.error(f"Upstream error: {exc.message} - {exc.details}")
    status = exc.status_code if 400 <= exc.status_code < 600 else 502
    return JSONResponse(status_code=status, content=exc.to_dict())


@app.exception_handler(UpstreamTimeout)
async def upstream_timeout_handler(request: Request, exc: UpstreamTimeout):
    logger.error(f"Upstream timeout: {exc.message} - {exc.details}")
    return JSONResponse(status_code=504, content=exc.to_dict())


@app.exception_handler(UpstreamUnavailable)
async def upstream_unavailable_handler(request: Request, exc: UpstreamUnavailable):
    logger.error(f"Upstream unavailable: {exc.message} - {exc.details}")
    return JSONResponse(status_code=503, content=exc.to_dict())


@app.exception_handler(UpstreamMalformedResponse)
async def upstream_malformed_handler(request: Request, exc: UpstreamMalformedResponse):
    logger.error(f"Malformed upstream response: {exc.message} - {exc.details}")
    return JSONResponse(status_code=502, content=exc.to_dict())


@app.exception_handler(MalformedEvent)
async def malformed_event_handler(request: Request, exc: MalformedEvent):
    logger.error(f"Malformed event: {exc.message} - {exc.details}")
    return JSONResponse(status_code=502, content=exc.to_dict())


@app.exception_handler(OddsGatewayError)
async def odds_gateway_error_handler(request: Request, exc: OddsGatewayError):
    logger.error(f"Gateway error: {exc.message} - {exc.details}")
    return JSONResponse(status_code=500, content=exc.to_dict())


# Include routers
app.include_router(scan.router, prefix="/scan", tags=["odds"])
app.include_router(markets.router, prefix="/markets", tags=["odds"])
app.include_router(parlay.router, prefix="/parlay", tags=["parlay"])
app.include_router(catalog.router, prefix="/catalog", tags=["catalog"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": settings.service_name,
        "env": settings.environment,
        "time": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/metrics")
async def metrics_summary(metrics: MetricsService = Depends(get_metrics)):
    """Get API metrics (requests, latency, cache stats)."""
    return metrics.get_metrics()


@app.post("/metrics/reset")
async def reset_metrics(metrics: MetricsService = Depends(get_metrics)):
    """Reset all metrics counters."""
    metrics.reset()
    return {"status": "reset"}


@app.get("/diag/routes")
async def list_routes():
    """List mounted routes."""
    routes = []
    for route in app.routes:
        methods = getattr(route, "methods", None)
        if not methods:
            continue
        routes.append({"path": route.path, "methods": sorted(methods - {"HEAD"})})
    return {"routes": routes}


@app.get("/")
async def root():
    """Service descriptor."""
    return {
        "service": settings.service_name,
        "version": __version__,
        "docs": "/docs",
    }
