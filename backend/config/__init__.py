"""Backend configuration module"""

from .extraction_config import (
    ExtractionConfig,
    get_extraction_config,
    load_extraction_config,
)

__all__ = [
    "ExtractionConfig",
    "get_extraction_config",
    "load_extraction_config",
]
