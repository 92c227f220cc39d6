"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.catalog.routes import router as catalog_router
from app.api.chat.routes import router as chat_router
from app.api.fallbacks.routes import router as fallbacks_router
from app.services.catalog import close_catalog_service
from supportbot.config import get_settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info(
        "Starting %s (proxy=%s, fallback store=%s)",
        settings.app_name,
        settings.mcp_url,
        settings.fallback_store_path,
    )
    yield
    # Shutdown
    close_catalog_service()


app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    description="Customer support chat for the storefront, backed by the store graph",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/healthz")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok", "environment": settings.environment}


# Include routers
app.include_router(chat_router, prefix="/chat", tags=["Chat"])
app.include_router(fallbacks_router, prefix="/fallbacks", tags=["Agent Console"])
app.include_router(catalog_router, prefix="/api/products", tags=["Catalog"])
