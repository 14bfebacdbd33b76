from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shortener_app.api.v1 import links, pages, redirect
from shortener_app.config import settings
from shortener_app.dependencies import get_renderer
from shortener_app.errors import register_exception_handlers
from shortener_app.logging_config import setup_logging
from shortener_app.middleware import LoggingMiddleware

logger = setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Load every template before accepting connections; errors abort startup
    get_renderer()
    logger.info(f"Server starting at {settings.server_host}:{settings.server_port}")
    yield


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="A URL shortener that tracks devices and scans",
    debug=settings.debug,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)
app.add_middleware(LoggingMiddleware)

register_exception_handlers(app)


@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "environment": settings.environment}




######## Include routers
app.include_router(links.router)
app.include_router(pages.router)
# Catch-all /{short_id} goes last
app.include_router(redirect.router)


if __name__ == "__main__":
    uvicorn.run(app, host=settings.server_host, port=settings.server_port)
