"""Routes package for API endpoints."""

from routes.health import health_bp
from routes.wardrobe_import import wardrobe_import_bp

__all__ = [
    "health_bp",
    "wardrobe_import_bp",
]
