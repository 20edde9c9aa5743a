# garage_billing/main.py
"""
FastAPI application entry point.
Wires the billing and health routers behind an optional API key.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from garage_billing.routers import billing, health
from garage_billing.config import settings
from garage_billing.utils.logger import get_logger
import time
import uvicorn

logger = get_logger(__name__)

OPEN_PATHS = {"/api/v1/health", "/docs", "/redoc", "/openapi.json"}

app = FastAPI(
    title="Garage Billing API",
    description="Event-log billing for a capacity-bounded parking garage.",
    version="1.0.0",
)


class BillingAccessMiddleware(BaseHTTPMiddleware):
    """
    Checks X-API-Key (or ?api_key=) when API_KEY is set, then times the request.
    API_KEY is read per request, so it can be toggled without rebuilding the app.
    """
    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if settings.API_KEY and path not in OPEN_PATHS:
            supplied = request.headers.get("X-API-Key") or request.query_params.get("api_key")
            if supplied != settings.API_KEY:
                logger.warning(f"Rejected {request.method} {path}: bad API key")
                return JSONResponse(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    content={"detail": "Invalid or missing API key"},
                )

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(f"{request.method} {path} → {response.status_code} ({elapsed_ms:.1f}ms)")
        return response


app.add_middleware(BillingAccessMiddleware)


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    logger.error(f"Billing request {request.url.path} failed: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


app.include_router(billing.router, prefix="/api/v1", tags=["Billing"])
app.include_router(health.router,  prefix="/api/v1", tags=["Health"])


@app.on_event("startup")
async def startup():
    logger.info(f"Garage Billing API on http://{settings.BACKEND_IP}:{settings.BACKEND_PORT} "
                f"| default capacity={settings.DEFAULT_CAPACITY} rates={settings.DEFAULT_RATES}")


def main():
    """Run the API server."""
    uvicorn.run(
        "garage_billing.main:app",
        host=settings.BACKEND_IP,
        port=settings.BACKEND_PORT,
        reload=False,
    )


if __name__ == "__main__":
    main()
