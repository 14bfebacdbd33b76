"""
Records stored in the in-memory tables.

All identifiers are opaque strings from the identifier generator.
Cross-table references (User.device_id, Scan.user_id, Scan.device_id)
are not checked for existence when written.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ShortLink(BaseModel):
    """A short identifier mapped to its target URL. Never updated or deleted."""

    short_id: str = Field(..., description="Generated short identifier")
    target_url: str = Field(..., description="The original URL, stored verbatim")
    created_at: datetime = Field(default_factory=utc_now)

    model_config = ConfigDict(frozen=True)


class Device(BaseModel):
    """A browser/client instance, stored the first time it is seen."""

    device_id: str
    created_at: datetime = Field(default_factory=utc_now)

    model_config = ConfigDict(frozen=True)


class User(BaseModel):
    """Registration submitted through the user form."""

    user_id: str
    device_id: str
    name: str
    email: str
    mobile: str
    created_at: datetime = Field(default_factory=utc_now)

    model_config = ConfigDict(frozen=True)


class Scan(BaseModel):
    """One completed visit tying a short link, device and user together."""

    scan_id: str
    short_id: str
    user_id: str
    device_id: str
    timestamp: datetime = Field(default_factory=utc_now)

    model_config = ConfigDict(frozen=True)
