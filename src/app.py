"""Shopping basket FastAPI application.

Processes commands synchronously via HTTP. Every request runs inside the
shopping domain context with a fresh structlog context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay ("production" → PostgreSQL).
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers
from shopping.domain import shopping  # noqa: E402
from shopping.utils.logging import add_context, clear_context

shopping.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Shopping Basket API",
    description="Per-user baskets with balance checks and checkout into orders",
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
    """Push the shopping domain context and reset the log context per request."""
    clear_context()
    add_context(method=request.method, path=request.url.path)
    try:
        with shopping.domain_context():
            response = await call_next(request)
    finally:
        clear_context()
    return response


# ---------------------------------------------------------------------------
# Error handlers and routers
# ---------------------------------------------------------------------------
from shopping.api import basket_router, order_router  # noqa: E402
from shopping.api.errors import register_error_handlers  # noqa: E402

register_exception_handlers(app)
register_error_handlers(app)

app.include_router(basket_router)
app.include_router(order_router)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": shopping.name})
