from typing import Any

from fastapi import APIRouter, Body, Depends

from shortener_app.dependencies import get_scan_service
from shortener_app.schemas.requests import (
    DatabaseSnapshot,
    DirectScanRequest,
    DirectScanResponse,
    ShortenRequest,
    ShortenResponse,
)
from shortener_app.services.scan_service import ScanService

router = APIRouter(tags=["links"])


@router.post("/shorten", response_model=ShortenResponse)
def shorten_url(
    payload: Any = Body(None),
    scan_service: ScanService = Depends(get_scan_service)
):
    """Create a new short link"""
    request = ShortenRequest.decode(payload)
    return scan_service.shorten(request.url)


@router.post("/direct_scan", response_model=DirectScanResponse)
def direct_scan(
    payload: Any = Body(None),
    scan_service: ScanService = Depends(get_scan_service)
):
    """Record a scan for an already registered device and user"""
    request = DirectScanRequest.decode(payload)
    return scan_service.direct_scan(request)


@router.get("/visualize_db", response_model=DatabaseSnapshot)
def visualize_db(scan_service: ScanService = Depends(get_scan_service)):
    """Dump every table"""
    return scan_service.snapshot()
