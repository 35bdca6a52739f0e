"""
PetCare Inventory Service
REST API for pet-care inventory items, photo upload and identity checks
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
import subprocess
import os

from shared.core import ServiceHealth, setup_logging, RequestLoggingMiddleware, get_logger
from app.api.routes import router as inventory_router
from app.api.auth_routes import router as auth_router
from app.application.results import ValidationFailed
from app.application.schemas import ValidationProblem
from app.core_settings import get_settings
from app.infrastructure.db import init_models, get_engine

settings = get_settings()

# Service configuration
SERVICE_NAME = "inventory-service"
SERVICE_VERSION = settings.SERVICE_VERSION
SERVICE_DESCRIPTION = "Pet-care inventory management service"

setup_logging(service_name=SERVICE_NAME, level=settings.LOG_LEVEL)

logger = get_logger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle management"""
    logger.info(f"Starting {SERVICE_NAME} version {SERVICE_VERSION}")

    try:
        logger.info("Running database migrations")
        result = subprocess.run(
            ["alembic", "upgrade", "head"],
            cwd=os.path.join(os.path.dirname(__file__), ".."),
            capture_output=True,
            text=True,
            check=False
        )
        if result.returncode != 0:
            logger.warning(f"Migration output: {result.stderr}")
        else:
            logger.info("Database migrations completed")
    except OSError as e:
        logger.error(f"Migration error: {e}")

    try:
        init_models()
        logger.info("Database models initialized")
    except Exception as e:
        logger.error(f"Failed to initialize database models: {e}")
        raise

    os.makedirs(settings.photo_dir, exist_ok=True)
    logger.info(f"{SERVICE_NAME} started successfully")

    yield

    logger.info(f"Shutting down {SERVICE_NAME}")

app = FastAPI(
    title=SERVICE_NAME,
    description=SERVICE_DESCRIPTION,
    version=SERVICE_VERSION,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject malformed requests with 400 and per-field messages"""
    failed = ValidationFailed.from_errors(exc.errors())
    logger.info(
        f"Request validation failed: {request.method} {request.url.path}",
        extra={'extra_fields': {'fields': sorted(failed.fields)}}
    )
    return JSONResponse(status_code=400, content=ValidationProblem(errors=failed.fields).model_dump())

health_service = ServiceHealth(
    SERVICE_NAME,
    SERVICE_VERSION,
    engine_provider=get_engine,
    storage_dirs=[settings.photo_dir],
)
app.include_router(health_service.create_health_router())

app.include_router(auth_router)
app.include_router(inventory_router)

# Uploaded photos are served from <STATIC_ROOT>/images/inventory/<name>
app.mount(
    "/images",
    StaticFiles(directory=os.path.join(settings.STATIC_ROOT, "images"), check_dir=False),
    name="images",
)

@app.get("/")
async def root():
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "status": "running",
        "docs": "/api/docs"
    }

@app.get("/info")
async def info():
    """Service information endpoint"""
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "description": SERVICE_DESCRIPTION,
        "environment": os.getenv("ENVIRONMENT", "development"),
        "endpoints": {
            "inventory": "/api/inventory",
            "search": "/api/inventory/search?q=",
            "upload": "/api/inventory/upload-photo",
            "identity": "/api/auth/me",
            "photos": "/images/inventory/",
            "health": "/health",
            "ready": "/health/ready",
            "metrics": "/metrics",
            "docs": "/api/docs"
        }
    }
