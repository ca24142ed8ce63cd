"""
Online pharmacy backend.

ARCHITECTURE:
- FastAPI routers: one per resource, thin, no business rules
- Services: validation, order lifecycle, reporting; one commit per operation
- SQLAlchemy models over SQLite (or any SQLAlchemy URL)
- Role-aware front end consumes the JSON API (camelCase keys)
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.staticfiles import StaticFiles

from pharmacy.api.errors import register_exception_handlers
from pharmacy.api.routes import auth, categories, customers, dashboard, medicines, order_details, orders, payments, users
from pharmacy.core.config import settings
from pharmacy.core.rate_limiter import RateLimitMiddleware
from pharmacy.db.init_db import init_db

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: create tables and the default admin."""
    try:
        print("[*] Initializing database...")
        init_db()
        print("[OK] Database initialized")
    except Exception:
        logger.exception("Startup error")
        raise

    yield

    logger.info("Shutting down")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Catalogue, orders, payments and dashboards for an online pharmacy.",
    version="1.0.0",
    lifespan=lifespan,
)

register_exception_handlers(app)

app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.ALLOWED_HOSTS)

# The SPA reads Location after creates and Content-Disposition on CSV export.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept", "Origin"],
    expose_headers=["Content-Disposition", "Location"],
    max_age=600,
)
app.add_middleware(RateLimitMiddleware)


# Sent on every response; HSTS only once served over TLS in production.
SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


@app.middleware("http")
async def add_security_headers(request, call_next):
    response = await call_next(request)
    response.headers.update(SECURITY_HEADERS)
    if settings.ENVIRONMENT == "production":
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
    return response


ROUTERS = (
    ("auth", auth.router, "auth"),
    ("categories", categories.router, "categories"),
    ("medicines", medicines.router, "medicines"),
    ("customers", customers.router, "customers"),
    ("orders", orders.router, "orders"),
    ("orderdetails", order_details.router, "order details"),
    ("payments", payments.router, "payments"),
    ("users", users.router, "users"),
    ("dashboard", dashboard.router, "dashboard"),
)
for path, router, tag in ROUTERS:
    app.include_router(router, prefix=f"{settings.API_PREFIX}/{path}", tags=[tag])

Path(settings.MEDIA_ROOT).mkdir(parents=True, exist_ok=True)
app.mount(settings.MEDIA_URL, StaticFiles(directory=settings.MEDIA_ROOT), name="media")


@app.get("/health")
def health():
    return {"status": "ok"}
