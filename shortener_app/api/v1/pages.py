from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Form
from fastapi.responses import HTMLResponse

from shortener_app.dependencies import get_scan_service
from shortener_app.schemas.requests import CheckDeviceRequest, UserFormData
from shortener_app.services.scan_service import ScanService

router = APIRouter(tags=["pages"], default_response_class=HTMLResponse)


@router.post("/check_device")
def check_device(
    payload: Any = Body(None),
    scan_service: ScanService = Depends(get_scan_service)
):
    """Browser already holds a device id: store it and show the user form"""
    request = CheckDeviceRequest.decode(payload)
    return HTMLResponse(scan_service.check_device(request))


@router.get("/get_form/{short_id}")
def get_form(
    short_id: str,
    scan_service: ScanService = Depends(get_scan_service)
):
    """Browser has no device id yet: mint one and show the form"""
    return HTMLResponse(scan_service.new_device_form(short_id))


@router.post("/user_form")
def user_form(
    short_id: Optional[str] = Form(None),
    device_id: Optional[str] = Form(None),
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    mobile: Optional[str] = Form(None),
    scan_service: ScanService = Depends(get_scan_service)
):
    """Store the registration, record the scan and show the redirect page"""
    form = UserFormData.decode({
        "short_id": short_id,
        "device_id": device_id,
        "name": name,
        "email": email,
        "mobile": mobile,
    })
    return HTMLResponse(scan_service.submit_user_form(form))
