"""
Common exceptions for ArchGraph.
"""


class ArchGraphError(Exception):
    """Base exception for all ArchGraph errors."""
    pass


class ConfigurationError(ArchGraphError):
    """Raised when there are configuration issues."""
    pass


class ValidationError(ArchGraphError):
    """Raised when request input is rejected (blank, identical or unknown system codes)."""
    pass


class NotFoundError(ArchGraphError):
    """Raised when a requested system record does not exist."""
    pass


class DataIntegrityError(ArchGraphError):
    """Raised when a located record is missing data a diagram depends on."""
    pass


class UpstreamError(ArchGraphError):
    """Raised when the core service cannot deliver the record set."""
    pass


class ServiceError(ArchGraphError):
    """Raised when service operations fail."""
    pass
