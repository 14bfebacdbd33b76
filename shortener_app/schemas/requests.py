"""
Request and response schemas.

JSON bodies arrive as arbitrary JSON and are decoded into typed requests in
an explicit step (`decode`), so a missing or non-string field becomes a
ValidationError that names every offending field.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr
from pydantic import ValidationError as PydanticValidationError

from shortener_app.errors import ValidationError
from shortener_app.models import Device, Scan, ShortLink, User


class DecodedRequest(BaseModel):
    """Base for requests decoded from loosely-typed payloads"""

    model_config = ConfigDict(extra="ignore")

    @classmethod
    def decode(cls, payload: Any):
        if not isinstance(payload, dict):
            payload = {}
        try:
            return cls.model_validate(payload)
        except PydanticValidationError as e:
            fields = _failed_fields(e)
            raise ValidationError(f"Missing {', '.join(fields)}", fields=fields) from e


def _failed_fields(error: PydanticValidationError) -> List[str]:
    fields = []
    for item in error.errors():
        name = str(item["loc"][0]) if item["loc"] else "body"
        if name not in fields:
            fields.append(name)
    return fields


class ShortenRequest(DecodedRequest):
    url: StrictStr = Field(..., description="The URL to shorten, stored verbatim")


class ShortenResponse(BaseModel):
    short_url: str
    timestamp: datetime


class CheckDeviceRequest(DecodedRequest):
    device_id: StrictStr
    short_id: StrictStr


class DirectScanRequest(DecodedRequest):
    device_id: StrictStr
    user_id: StrictStr
    short_id: StrictStr


class DirectScanResponse(BaseModel):
    scan_id: str
    url: str
    timestamp: datetime


class UserFormData(BaseModel):
    """Fields posted by the registration form"""

    short_id: str
    device_id: str
    name: str
    email: str
    mobile: str

    @classmethod
    def decode(cls, form: Dict[str, Optional[str]]) -> "UserFormData":
        missing = [key for key in ("short_id", "device_id") if form.get(key) is None]
        if missing:
            raise ValidationError(f"Missing {', '.join(missing)}", fields=missing)

        blank = [
            key for key in ("name", "email", "mobile")
            if not (form.get(key) or "").strip()
        ]
        if blank:
            raise ValidationError("All fields are required", fields=blank)

        return cls(**{key: form[key] for key in cls.model_fields})


class DatabaseSnapshot(BaseModel):
    """Point-in-time copy of every table, keyed by record id"""

    shortened_links: Dict[str, ShortLink]
    users: Dict[str, User]
    devices: Dict[str, Device]
    scans: Dict[str, Scan]
