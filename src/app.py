"""GoldenMunch kiosk FastAPI application.

Local server the kiosk shell and the mobile cake editor talk to. Each request
is wrapped in the correct domain context based on URL prefix.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Domains are initialized at module level so uvicorn workers share them.
# Importing kiosk.domain also configures logging for the process.
from cake_studio.domain import cake_studio
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from kiosk.domain import kiosk
from protean.integrations.fastapi import register_exception_handlers
from shared.logging import bind_request_context, clear_request_context

kiosk.init()
cake_studio.init()

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/cart": kiosk,
    "/menu": kiosk,
    "/handoff": kiosk,
    "/designs": cake_studio,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="GoldenMunch Kiosk API",
    description="Bakery kiosk — cart, checkout and custom cake designs",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the correct Protean domain context for each request."""
    domain = _resolve_domain(request.url.path)
    if domain is not None:
        bind_request_context(path=request.url.path, domain=domain.name)
        try:
            with domain.domain_context():
                response = await call_next(request)
        finally:
            clear_request_context()
        return response
    # No domain match — pass through (health check, docs, etc.)
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from cake_studio.api import design_router  # noqa: E402
from kiosk.api import cart_router, handoff_router, menu_router  # noqa: E402

app.include_router(cart_router)
app.include_router(menu_router)
app.include_router(handoff_router)
app.include_router(design_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "kiosk": {"name": kiosk.name},
                "cake_studio": {"name": cake_studio.name},
            },
        }
    )
