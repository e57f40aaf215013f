"""Marketplace FastAPI application.

Processes commands synchronously via HTTP inside the marketplace domain
context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from marketplace.domain import marketplace
from marketplace.utils.logging import add_context, clear_context, configure_logging, get_logger

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV selects the domain.toml overlay (test, production).
configure_logging()
marketplace.init()

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Artisan Marketplace API",
    description="Handcrafted goods marketplace — catalogue, cart, orders, and reviews",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the marketplace domain context and bind a request id for logging."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    clear_context()
    add_context(request_id=request_id, method=request.method, path=request.url.path)
    with marketplace.domain_context():
        response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from marketplace.api.cart import router as cart_router  # noqa: E402
from marketplace.api.catalogue import artisan_router, product_router  # noqa: E402
from marketplace.api.errors import register_exception_handlers  # noqa: E402
from marketplace.api.orders import router as order_router  # noqa: E402
from marketplace.api.reviews import router as review_router  # noqa: E402

register_exception_handlers(app)
app.include_router(order_router)
app.include_router(review_router)
app.include_router(artisan_router)
app.include_router(product_router)
app.include_router(cart_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": marketplace.name})
