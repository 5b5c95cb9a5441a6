# ferrelog/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI

from ferrelog.core.config import get_settings
from ferrelog.database import create_db_and_tables

# Import models so SQLModel metadata is populated before create_all()
from ferrelog.models import user as _user_models  # noqa: F401
from ferrelog.models import order as _order_models  # noqa: F401
from ferrelog.models import shipment as _shipment_models  # noqa: F401
from ferrelog.models import evidence as _evidence_models  # noqa: F401


# Routers
from ferrelog.routers.users import router as users_router
from ferrelog.routers.quotes import router as quotes_router
from ferrelog.routers.orders import router as orders_router
from ferrelog.routers.shipments import router as shipments_router
from ferrelog.routers.deliveries import router as deliveries_router
from ferrelog.routers.admin import router as admin_router

settings = get_settings()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Verify DB connectivity and create tables.

    Shutdown:
      - No special cleanup needed for sync engine.
    """
    logger.info("Startup: connecting to the database...")
    try:
        create_db_and_tables()
        logger.info("Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"Startup: DB connection FAILED: {e}")
        raise
    yield


app = FastAPI(
    title=settings.PROJECT_NAME or "FerreNico Logistics API",
    version="0.1.0",
    lifespan=lifespan,
)


# --- CORS configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Versioned API prefix, e.g. /api/v1
app.include_router(users_router, prefix=settings.API_V1_STR)
app.include_router(quotes_router, prefix=settings.API_V1_STR)
app.include_router(orders_router, prefix=settings.API_V1_STR)
app.include_router(shipments_router, prefix=settings.API_V1_STR)
app.include_router(deliveries_router, prefix=settings.API_V1_STR)
app.include_router(admin_router, prefix=settings.API_V1_STR)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "ferrelog"}
