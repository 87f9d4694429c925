"""
ArchGraph diagram API.

Provides REST access to the diagram services with error mapping,
monitoring and documentation.
"""

from .app import create_app
from .models import APIResponse, ErrorResponse

__all__ = [
    "create_app",
    "APIResponse",
    "ErrorResponse",
]
