"""
FastAPI dependencies for dependency injection.

This module provides singleton instances of the store, identifier generator
and template renderer that are injected into the service and routes.

Tests override get_store (and, where needed, get_id_generator) through
app.dependency_overrides.
"""

from functools import lru_cache

from fastapi import Depends

from shortener_app.config import settings
from shortener_app.rendering import TemplateRenderer
from shortener_app.services.id_generator import IdGenerator, RandomIdGenerator
from shortener_app.services.scan_service import ScanService
from shortener_app.store import Store


@lru_cache()
def get_store() -> Store:
    """
    Get the process-wide store (singleton).

    All request handlers share this instance for the lifetime of the process.
    """
    return Store(lock_timeout=settings.store_lock_timeout)


@lru_cache()
def get_id_generator() -> IdGenerator:
    return RandomIdGenerator(length=settings.id_length)


@lru_cache()
def get_renderer() -> TemplateRenderer:
    """
    Get the template renderer (singleton).

    Called once at startup so template errors abort the service.
    """
    return TemplateRenderer(settings.templates_path)


def get_scan_service(
    store: Store = Depends(get_store),
    id_generator: IdGenerator = Depends(get_id_generator),
    renderer: TemplateRenderer = Depends(get_renderer)
) -> ScanService:
    """Get ScanService with all dependencies injected."""
    return ScanService(
        store=store,
        id_generator=id_generator,
        renderer=renderer,
        base_url=settings.base_url
    )
