"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from config.settings import settings
from src.ef_cart.api.router import router as cart_router
from src.ef_catalog.api.router import owner_router as owner_listings_router
from src.ef_catalog.api.router import router as listings_router
from src.ef_checkout.api.router import checkout_router, orders_router
from src.ef_checkout.infrastructure.wallet_providers import build_wallet_provider
from src.ef_common.errors import AppError, InternalError, RequestValidationFailed
from src.ef_common.response import error_response
from src.ef_gateway.api.router import router as accounts_router
from src.ef_gateway.middleware.request_log import RequestLogMiddleware
from src.ef_store.memory import InMemoryStore
from src.ef_store.seed import seed_demo_data

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger("ef.app")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: build store (+ demo data) and wallet provider. Shutdown: close wallet."""
    # Startup
    app.state.store = InMemoryStore()
    if settings.SEED_DEMO_DATA:
        await seed_demo_data(app.state.store, settings.SEED_DEMO_PASSWORD)
    app.state.wallet = build_wallet_provider(settings)
    logger.info("Started with wallet provider %s", settings.WALLET_PROVIDER)
    yield
    # Shutdown
    aclose = getattr(app.state.wallet, "aclose", None)
    if aclose is not None:
        await aclose()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


def _error_json(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message, request)
    return JSONResponse(status_code=exc.http_status, content=resp.model_dump())


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _error_json(request, exc)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    detail = f"{field}: {first.get('msg', 'invalid request')}" if field else "Invalid request"
    return _error_json(request, RequestValidationFailed(detail))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_json(request, InternalError())


app.include_router(accounts_router, prefix="/api/v1")
app.include_router(owner_listings_router, prefix="/api/v1")
app.include_router(listings_router, prefix="/api/v1")
app.include_router(cart_router, prefix="/api/v1")
app.include_router(checkout_router, prefix="/api/v1")
app.include_router(orders_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
