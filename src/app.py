"""Savourly FastAPI application.

Multi-domain web server that processes commands synchronously via HTTP.
Each request is wrapped in the correct domain context based on URL prefix.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 3000 --reload
"""

from contextlib import asynccontextmanager

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Domains are initialized at module level so uvicorn workers share them.
from catalogue.domain import catalogue  # noqa: E402
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from ordering.domain import ordering  # noqa: E402
from shared.errors import register_error_handlers
from shared.logging import add_context, clear_context, get_logger
from support.domain import support  # noqa: E402

ordering.init()
catalogue.init()
support.init()

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/api/orders": ordering,
    "/api/my-orders": ordering,
    "/api/admin/orders": ordering,
    "/api/admin/customers": ordering,
    "/api/admin/notify": ordering,
    "/api/plans": catalogue,
    "/api/consultations": support,
    "/api/help": support,
    "/api/admin/consultations": support,
    "/api/admin/help": support,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path == prefix or path.startswith(prefix + "/"):
            return domain
    return None


def seed_default_plans() -> int:
    """Fill an empty plan catalogue with the default plans."""
    from catalogue.plan.seeding import SeedDefaultPlans

    with catalogue.domain_context():
        return catalogue.process(SeedDefaultPlans(), asynchronous=False)


@asynccontextmanager
async def lifespan(app: FastAPI):
    seeded = seed_default_plans()
    logger.info("app_started", plans_seeded=seeded)
    yield


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Savourly API",
    description="Meal-subscription storefront — Ordering, Catalogue & Support domains",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the correct Protean domain context for each request."""
    clear_context()
    add_context(method=request.method, path=request.url.path)

    domain = _resolve_domain(request.url.path)
    if domain is not None:
        with domain.domain_context():
            response = await call_next(request)
        return response
    # No domain match — pass through (health check, credentials, docs, etc.)
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from access.api import credentials_router  # noqa: E402
from catalogue.api import plan_router  # noqa: E402
from ordering.api import admin_router as ordering_admin_router  # noqa: E402
from ordering.api import legacy_router as ordering_legacy_router  # noqa: E402
from ordering.api import router as order_router  # noqa: E402
from support.api import admin_router as support_admin_router  # noqa: E402
from support.api import consultation_router, help_router  # noqa: E402

app.include_router(order_router)
app.include_router(ordering_admin_router)
app.include_router(ordering_legacy_router)
app.include_router(plan_router)
app.include_router(consultation_router)
app.include_router(help_router)
app.include_router(support_admin_router)
app.include_router(credentials_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "ordering": {"name": ordering.name},
                "catalogue": {"name": catalogue.name},
                "support": {"name": support.name},
            },
        }
    )
