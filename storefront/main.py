"""
Storefront Application

Server side of the GLF Online store: cookie-held carts validated against
Shopify, plus the site's form actions.
"""

import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Load environment variables before settings are read
load_dotenv(os.path.join(os.path.dirname(__file__), "..", "config", ".env"))

from .core.config import settings  # noqa: E402
from .routes import cart_router, products_router, layout_router, contact_router  # noqa: E402
from .routes.deps import close_clients  # noqa: E402

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Storefront starting up...")
    logger.info(f"Commerce API: {settings.storefront_api_url}")
    logger.info(f"Session key fallbacks: {len(settings.encryption_key_fallbacks)}")

    yield

    logger.info("Storefront shutting down...")
    await close_clients()


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Cart sessions and form actions for the GLF Online storefront",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[f"https://{settings.shopify_store_domain}"],
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Include routers
app.include_router(layout_router)
app.include_router(cart_router)
app.include_router(contact_router)
app.include_router(products_router)


@app.get("/")
async def home():
    return {
        "message": "GLF Online Storefront API",
        "docs": "/docs",
        "endpoints": {
            "cart": "/cart",
            "layout": "/api/layout",
            "add_to_cart": "/{theme}/products/{handle}",
            "contact": "/contact",
            "newsletter": "/newsletter",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "storefront",
        "commerce_configured": bool(settings.shopify_storefront_access_token),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "storefront.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
