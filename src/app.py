"""Storefront FastAPI application.

Processes commands synchronously over HTTP. Every request runs inside the
storefront domain context and carries a request id in its log context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from storefront/domain.toml.
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import storefront.elements  # noqa: F401
from storefront.domain import storefront
from storefront.utils.logging import add_context, clear_context, get_logger

storefront.init()

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront API",
    description="Catalogue, cart, checkout, reviews and back-office",
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
    """Push the storefront domain context and bind request details to the logs."""
    clear_context()
    request_id = request.headers.get("x-request-id") or uuid4().hex
    add_context(request_id=request_id, path=request.url.path)

    with storefront.domain_context():
        response = await call_next(request)

    response.headers["X-Request-Id"] = request_id
    logger.info("request_completed", method=request.method, status_code=response.status_code)
    return response


# ---------------------------------------------------------------------------
# Error translation and routers
# ---------------------------------------------------------------------------
from storefront.admin.api import router as admin_router  # noqa: E402
from storefront.catalogue.api import category_router, product_router  # noqa: E402
from storefront.content.api import router as content_router  # noqa: E402
from storefront.identity.api import router as identity_router  # noqa: E402
from storefront.ordering.api import cart_items_router, cart_router, order_router  # noqa: E402
from storefront.reviews.api import router as reviews_router  # noqa: E402
from storefront.web.errors import register_exception_handlers  # noqa: E402

register_exception_handlers(app)

app.include_router(product_router)
app.include_router(category_router)
app.include_router(reviews_router)
app.include_router(cart_router)
app.include_router(cart_items_router)
app.include_router(order_router)
app.include_router(content_router)
app.include_router(identity_router)
app.include_router(admin_router)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": storefront.name})
