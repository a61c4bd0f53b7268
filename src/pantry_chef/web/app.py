"""
Pantry Chef Web API - FastAPI application.

Stateless: the caller sends pantry and recipes with each request.
"""

import logging

from fastapi import FastAPI

from pantry_chef import __version__
from pantry_chef.config import settings
from pantry_chef.core.entities import IMAGE_PROVIDER_ORDER, TEXT_PROVIDER_ORDER
from pantry_chef.llm import is_ai_configured
from pantry_chef.web.ai_routes import router as ai_router

logger = logging.getLogger(__name__)

app = FastAPI(title="Pantry Chef", version=__version__)

app.include_router(ai_router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    """Log provider configuration on startup."""
    logger.info("Pantry Chef starting up...")
    logger.info(f"  DeepSeek configured: {settings.has_deepseek_key}")
    logger.info(f"  OpenAI configured: {settings.has_openai_key}")


@app.get("/health")
async def health_check():
    """Health check with provider order and availability."""
    return {
        "status": "healthy",
        "aiConfigured": is_ai_configured(),
        "textProviders": list(TEXT_PROVIDER_ORDER),
        "imageProviders": list(IMAGE_PROVIDER_ORDER),
    }
