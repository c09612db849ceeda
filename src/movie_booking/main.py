"""
FastAPI application entry point
"""
from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, Response
from contextlib import asynccontextmanager
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from movie_booking.core.config import settings
from movie_booking.core.database import engine, get_db, server_version, check_database_health
from movie_booking.core.logging_config import setup_logging
from movie_booking.core.metrics import get_metrics, CONTENT_TYPE_LATEST
from movie_booking.api import auth, movies, bookings
from movie_booking.middleware.tracing import TracingMiddleware

setup_logging()
logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for startup and shutdown"""
    logger.info("🚀 Starting up Movie Booking Service...")
    logger.info(f"📊 Database: {engine.url.render_as_string(hide_password=True)}")

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("✅ Database connection successful")
    except Exception as e:
        logger.error(f"❌ Database connection failed: {e}")
        raise

    if settings.REQUIRE_AUTH:
        logger.info("🔒 Bearer tokens required on catalog and booking routes")

    yield

    logger.info("🛑 Shutting down...")
    await engine.dispose()
    logger.info("✅ Cleanup complete")


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Movie ticket booking backend: signup, catalog and seat bookings",
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and path values are client errors (400)"""
    logger.warning(f"⚠️ Invalid request for {request.url.path}")

    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request", "errors": errors},
    )


# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(TracingMiddleware)


@app.get("/", tags=["Root"], include_in_schema=False)
async def root():
    """Static landing page"""
    return FileResponse(STATIC_DIR / "index.html")


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    database_ok = await check_database_health()

    return {
        "status": "healthy" if database_ok else "degraded",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "database": "healthy" if database_ok else "unavailable",
    }


@app.get("/version", tags=["Health"])
async def database_version(db: AsyncSession = Depends(get_db)):
    """Database server version"""
    try:
        return {"version": await server_version(db)}
    except Exception:
        logger.exception("Database connection error")
        raise HTTPException(status_code=500, detail="Failed to fetch database version")


@app.get("/metrics", tags=["Health"], include_in_schema=False)
async def metrics():
    """Prometheus scrape endpoint"""
    return Response(content=get_metrics(), media_type=CONTENT_TYPE_LATEST)


# Include routers
app.include_router(auth.router, tags=["Auth"])
app.include_router(movies.router, tags=["Movies"])
app.include_router(bookings.router, tags=["Bookings"])


def run():
    """Console entry point: serve the app with uvicorn"""
    import uvicorn
    uvicorn.run(
        "movie_booking.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
