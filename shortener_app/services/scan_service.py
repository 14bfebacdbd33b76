import logging

from shortener_app.errors import NotFoundError
from shortener_app.models import Device, Scan, ShortLink, User, utc_now
from shortener_app.rendering import TemplateRenderer
from shortener_app.schemas.requests import (
    CheckDeviceRequest,
    DatabaseSnapshot,
    DirectScanRequest,
    DirectScanResponse,
    ShortenResponse,
    UserFormData,
)
from shortener_app.services.id_generator import IdGenerator
from shortener_app.store import Store

logger = logging.getLogger(__name__)


class ScanService:
    """
    Scan tracking service with injected store, id generator and renderer.

    Each method is one externally exposed operation. Methods touch the
    store one table at a time and raise the first error they meet; writes
    made before that error are kept (there is no rollback).
    """

    def __init__(
        self,
        store: Store,
        id_generator: IdGenerator,
        renderer: TemplateRenderer,
        base_url: str
    ):
        self.store = store
        self.ids = id_generator
        self.renderer = renderer
        self.base_url = base_url

    def shorten(self, url: str) -> ShortenResponse:
        """Create a new short link.

        Always issues a fresh short id, even for a URL shortened before.
        """
        short_id = self.ids.generate()
        link = ShortLink(short_id=short_id, target_url=url)
        self.store.links.insert(short_id, link)
        logger.info(f"Shortened {url} as {short_id}")

        return ShortenResponse(
            short_url=self._short_url(short_id),
            timestamp=link.created_at
        )

    def redirect_page(self, short_id: str) -> str:
        """Start the visitor flow: the device check page"""
        if not self.store.links.contains(short_id):
            raise NotFoundError(f"Short URL not found: {short_id}")

        return self.renderer.render("check_device", {"short_id": short_id})

    def check_device(self, request: CheckDeviceRequest) -> str:
        """Register a known-to-the-browser device and show the user form"""
        self._ensure_device(request.device_id)

        return self.renderer.render("user_form", {
            "short_id": request.short_id,
            "device_id": request.device_id,
        })

    def new_device_form(self, short_id: str) -> str:
        """Mint a device id for a browser that has none yet"""
        device_id = self.ids.generate()
        self._ensure_device(device_id)

        return self.renderer.render("new_device_form", {
            "short_id": short_id,
            "device_id": device_id,
        })

    def submit_user_form(self, form: UserFormData) -> str:
        """
        Record the registration and the scan, then render the redirect page.

        Order of writes: Device (if new), User, then Scan. An unknown
        short_id fails after the User is written and before any Scan.
        """
        user_id = self.ids.generate()
        user = User(
            user_id=user_id,
            device_id=form.device_id,
            name=form.name,
            email=form.email,
            mobile=form.mobile,
        )

        self._ensure_device(form.device_id)
        self.store.users.insert(user_id, user)

        url = self._target_url(form.short_id)
        scan = self._record_scan(form.short_id, user_id, form.device_id)

        return self.renderer.render("redirect", {
            "device_id": form.device_id,
            "user_id": user_id,
            "name": form.name,
            "email": form.email,
            "mobile": form.mobile,
            "scan_id": scan.scan_id,
            "short_id": form.short_id,
            "short_url": self._short_url(form.short_id),
            "timestamp": scan.timestamp.isoformat(),
            "url": url,
        })

    def direct_scan(self, request: DirectScanRequest) -> DirectScanResponse:
        """Record a scan for a returning visitor without any page flow.

        device_id and user_id are taken as given; only short_id is checked.
        """
        url = self._target_url(request.short_id)
        scan = self._record_scan(request.short_id, request.user_id, request.device_id)

        return DirectScanResponse(scan_id=scan.scan_id, url=url, timestamp=scan.timestamp)

    def snapshot(self) -> DatabaseSnapshot:
        # One table locked at a time; the result is not a cross-table point in time
        return DatabaseSnapshot(**{
            table.name: table.snapshot() for table in self.store.tables()
        })

    def _short_url(self, short_id: str) -> str:
        return f"{self.base_url}/{short_id}"

    def _target_url(self, short_id: str) -> str:
        link = self.store.links.get(short_id)
        if link is None:
            raise NotFoundError(f"Short URL not found: {short_id}")
        return link.target_url

    def _ensure_device(self, device_id: str) -> None:
        # First write wins; concurrent requests for the same new id store one record
        if self.store.devices.insert_if_absent(device_id, Device(device_id=device_id)):
            logger.info(f"Registered device {device_id}")

    def _record_scan(self, short_id: str, user_id: str, device_id: str) -> Scan:
        scan = Scan(
            scan_id=self.ids.generate(),
            short_id=short_id,
            user_id=user_id,
            device_id=device_id,
            timestamp=utc_now(),
        )
        self.store.scans.insert(scan.scan_id, scan)
        logger.info(f"Recorded scan {scan.scan_id} for {short_id}")
        return scan
