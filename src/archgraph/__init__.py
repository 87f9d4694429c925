"""
ArchGraph - architecture diagrams from system integration records.
"""

__version__ = "1.0.0"
__author__ = "ArchGraph Team"

# Re-export main components for easy access
from .shared.config.settings import get_settings
from .shared.exceptions import ArchGraphError, ValidationError, NotFoundError

__all__ = [
    "get_settings",
    "ArchGraphError",
    "ValidationError",
    "NotFoundError",
]
