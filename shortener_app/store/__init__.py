"""
Store module for the scan tracker.
Lock-guarded in-memory tables shared across request handlers.
"""

from .tables import InMemoryTable, Store

__all__ = [
    "InMemoryTable",
    "Store",
]
