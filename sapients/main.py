"""FastAPI main application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse

from sapients.core.config import settings
from sapients.core.exceptions import RedirectRequired, SapientsError, StorageUnavailableError
from sapients.core.middleware import setup_middleware

from sapients.api.access import router as access_router
from sapients.api.activity import router as activity_router
from sapients.api.auth import router as auth_router
from sapients.api.pages import router as pages_router

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("sapients")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting %s (%s)", settings.APP_NAME, settings.ENVIRONMENT)
    if settings.is_production and settings.DELETE_PASSWORD == "deleteit":
        logger.warning("DELETE_PASSWORD still has its default value")
    yield
    logger.info("Shutting down %s", settings.APP_NAME)


app = FastAPI(
    title="Sapients Tracker API",
    description="Production tracker: sessions and role-based access",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Middleware
setup_middleware(app)


@app.exception_handler(RedirectRequired)
async def redirect_handler(request: Request, exc: RedirectRequired):
    return RedirectResponse(url=exc.location, status_code=307)


@app.exception_handler(StorageUnavailableError)
async def storage_exception_handler(request: Request, exc: StorageUnavailableError):
    logger.error("Storage unavailable while handling %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.exception_handler(SapientsError)
async def sapients_exception_handler(request: Request, exc: SapientsError):
    return JSONResponse(status_code=400, content={"detail": exc.message})


# Register routers
app.include_router(auth_router, prefix="/api")
app.include_router(access_router, prefix="/api")
app.include_router(activity_router, prefix="/api")
app.include_router(pages_router)


@app.get("/", include_in_schema=False)
async def root():
    return RedirectResponse(url=settings.DEFAULT_LANDING_PATH, status_code=307)


@app.get("/api/health")
async def health():
    """Quick health check endpoint."""
    return {"status": "ok"}
