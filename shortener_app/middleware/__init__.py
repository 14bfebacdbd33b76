"""HTTP middleware for the scan tracker."""

from .logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
