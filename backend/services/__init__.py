"""
Services Package - Business Logic Layer

This package contains service modules that encapsulate business logic,
separating it from HTTP routing concerns.

Services can be called from:
- Flask routes (HTTP requests)
- Background tasks (Celery)
- Tests

Available services:
- wardrobe_import_service: payload validation, extraction and import jobs
"""

from . import wardrobe_import_service

__all__ = [
    'wardrobe_import_service',
]
