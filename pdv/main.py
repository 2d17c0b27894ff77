"""
PDV SaaS - Main Application Entry Point
Multi-tenant point-of-sale backend
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import structlog

from pdv.core.config import get_settings
from pdv.core.database import init_store
from pdv.core.errors import PDVError
from pdv.core.time_utils import utcnow
from pdv.api import auth, dashboard, products, sales, settings as settings_api
from pdv.schemas.token import LoginResponse
from pdv.services.seed import seed_demo_data

settings = get_settings()

# Configure structured logging
logging.basicConfig(format="%(message)s", level=settings.LOG_LEVEL.upper())
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    # Startup
    logger.info("Initializing PDV SaaS backend", environment=settings.ENVIRONMENT)
    store = init_store()
    if settings.SEED_DEMO_DATA:
        seed_demo_data(store)

    yield

    # Shutdown
    logger.info("Shutting down PDV SaaS backend")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="Multi-tenant point-of-sale backend",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure middleware stack
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)


@app.exception_handler(PDVError)
async def pdv_error_handler(request: Request, exc: PDVError):
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__}: {exc.message}", path=request.url.path)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "message": "Dados inválidos", "errors": errors},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error", path=request.url.path)
    content = {"success": False, "message": "Erro no servidor"}
    if not settings.is_production:
        content["error"] = str(exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


# Include routers
app.include_router(auth.router, prefix=f"{settings.API_PREFIX}/auth", tags=["auth"])
app.include_router(products.router, prefix=f"{settings.API_PREFIX}/products", tags=["products"])
app.include_router(sales.router, prefix=f"{settings.API_PREFIX}/sales", tags=["sales"])
app.include_router(dashboard.router, prefix=f"{settings.API_PREFIX}/dashboard", tags=["dashboard"])
app.include_router(settings_api.router, prefix=settings.API_PREFIX, tags=["settings"])

# Legacy login path
app.add_api_route(
    f"{settings.API_PREFIX}/login",
    auth.login,
    methods=["POST"],
    response_model=LoginResponse,
    tags=["auth"],
)


@app.get(f"{settings.API_PREFIX}/health", tags=["system"])
@app.get("/health", include_in_schema=False)
async def health_check():
    """Health check endpoint"""
    return {"status": "OK", "timestamp": utcnow().isoformat()}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "pdv.main:app",
        host="0.0.0.0",
        port=3000,
        reload=settings.ENVIRONMENT == "development",
        log_level="info",
    )
