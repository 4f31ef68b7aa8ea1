from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.api import api_router
from core.config import configs
from core.dependencies import get_marker_service
from core.logger import setup_logging

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    service = get_marker_service()
    logger.info(f"🔧 Marker service ready (cache size {service.config.cache_size}).")
    yield
    # Shutdown
    service.cache.clear()
    logger.info("🛑 Shutting down marker service...")

app = FastAPI(
    title=configs.PROJECT_NAME,
    description="Photo map marker clustering",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS (Allow all for development env)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api")

@app.get("/")
async def root():
    return {"message": "Photo Map Clustering Running"}

@app.get("/health")
async def health_check():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    # Swagger UI at http://127.0.0.1:8000/docs
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=configs.ENVIRONMENT.lower() != "production",
    )
