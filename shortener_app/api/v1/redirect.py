from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from shortener_app.dependencies import get_scan_service
from shortener_app.services.scan_service import ScanService

router = APIRouter(tags=["redirect"])


@router.get("/{short_id}", response_class=HTMLResponse)
def redirect_to_device_check(
    short_id: str,
    scan_service: ScanService = Depends(get_scan_service)
):
    """
    Entry point of a short link.

    Does not redirect straight away: the check_device page first looks up
    the browser's device id, then the visitor goes through the user form,
    and only the final page sends them to the target URL.

    Registered last so fixed paths like /visualize_db win over this catch-all.
    """
    return HTMLResponse(scan_service.redirect_page(short_id))
