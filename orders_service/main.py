"""
Orders Service - Backend API
Order placement over customers, products and inventory
"""
import time
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from orders_service.api import orders
from orders_service.core.config import settings
from orders_service.core.database import get_db_connection_dict_with_retry, CONNECTION_TIMEOUT

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description=settings.API_DESCRIPTION,
    debug=settings.API_DEBUG
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(orders.router, prefix="/api/v1/orders", tags=["Orders"])


@app.get("/")
async def root():
    """Root endpoint - API status"""
    return {
        "message": settings.API_TITLE,
        "status": "online",
        "version": settings.API_VERSION
    }


@app.get("/health")
def health():
    """Health check endpoint for monitoring - tests database connectivity"""
    start_time = time.time()

    db_status = "unknown"
    db_latency_ms = None
    db_error = None

    try:
        # Fast check: a single attempt, no backoff
        conn = get_db_connection_dict_with_retry(max_retries=1, retry_delay=0.5)
        try:
            cursor = conn.cursor()

            db_start = time.time()
            cursor.execute("SELECT 1")
            cursor.fetchone()
            db_latency_ms = round((time.time() - db_start) * 1000, 2)

            cursor.close()
        finally:
            conn.close()
        db_status = "connected"
    except Exception as e:
        logger.warning(f"Health check could not reach the database: {e}")
        db_status = "disconnected"
        db_error = str(e)

    total_latency_ms = round((time.time() - start_time) * 1000, 2)

    return {
        "status": "healthy" if db_status == "connected" else "degraded",
        "service": "orders-api",
        "version": settings.API_VERSION,
        "database": {
            "status": db_status,
            "latency_ms": db_latency_ms,
            "error": db_error,
            "connection_timeout_s": CONNECTION_TIMEOUT
        },
        "total_latency_ms": total_latency_ms
    }
