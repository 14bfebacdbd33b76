"""
Record models for the scan tracker.

Records live only in memory (see shortener_app.store); nothing is persisted
across restarts.
"""

from .records import Device, Scan, ShortLink, User, utc_now

__all__ = ["Device", "Scan", "ShortLink", "User", "utc_now"]
