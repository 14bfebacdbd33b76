"""
Test ScanService business logic directly, without HTTP.
"""
import itertools
import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

import pytest

from shortener_app.errors import NotFoundError, ValidationError
from shortener_app.rendering import TemplateRenderer
from shortener_app.schemas.requests import (
    CheckDeviceRequest,
    DirectScanRequest,
    UserFormData,
)
from shortener_app.services.id_generator import IdGenerator
from shortener_app.services.scan_service import ScanService
from shortener_app.store import Store

from .conftest import TEMPLATES_DIR


class SequentialIdGenerator(IdGenerator):
    """Predictable ids: id0000001, id0000002, ..."""

    def __init__(self):
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def generate(self) -> str:
        with self._lock:
            return f"id{next(self._counter):08d}"


@pytest.fixture
def service(store):
    return ScanService(
        store=store,
        id_generator=SequentialIdGenerator(),
        renderer=TemplateRenderer(str(TEMPLATES_DIR)),
        base_url="http://short.test"
    )


class TestScanService:

    def test_shorten(self, service: ScanService, store: Store):
        response = service.shorten("https://example.com/x")

        assert response.short_url == "http://short.test/id00000001"
        assert store.links.get("id00000001").target_url == "https://example.com/x"
        assert response.timestamp.tzinfo is not None

    def test_redirect_page_unknown(self, service: ScanService):
        with pytest.raises(NotFoundError):
            service.redirect_page("missing")

    def test_concurrent_check_device_stores_one_device(self, service: ScanService, store: Store):
        barrier = threading.Barrier(8)
        request = CheckDeviceRequest(device_id="dev1", short_id="whatever")

        def check(_):
            barrier.wait()
            return service.check_device(request)

        with ThreadPoolExecutor(max_workers=8) as pool:
            pages = list(pool.map(check, range(8)))

        assert all("dev1" in page for page in pages)
        assert len(store.devices) == 1

    def test_user_form_keeps_user_when_short_id_unknown(self, service: ScanService, store: Store):
        form = UserFormData(short_id="missing", device_id="dev1", name="A", email="a@b.com", mobile="1")

        with pytest.raises(NotFoundError):
            service.submit_user_form(form)

        # No rollback: device and user were written before the lookup failed
        assert store.devices.contains("dev1")
        assert len(store.users) == 1
        assert len(store.scans) == 0

    def test_user_form_renders_rfc3339_timestamp(self, service: ScanService, store: Store):
        short_id = service.shorten("https://example.com/x").short_url.rsplit("/", 1)[-1]
        form = UserFormData(short_id=short_id, device_id="dev1", name="A", email="a@b.com", mobile="1")

        html = service.submit_user_form(form)

        scan = next(iter(store.scans.snapshot().values()))
        assert scan.timestamp.isoformat() in html
        assert datetime.fromisoformat(scan.timestamp.isoformat()).utcoffset().total_seconds() == 0

    def test_direct_scan(self, service: ScanService, store: Store):
        service.shorten("https://example.com/x")

        response = service.direct_scan(
            DirectScanRequest(device_id="d", user_id="u", short_id="id00000001")
        )

        assert response.url == "https://example.com/x"
        assert store.scans.contains(response.scan_id)

    def test_snapshot_counts(self, service: ScanService):
        for i in range(4):
            service.shorten(f"https://example.com/{i}")
        service.new_device_form("id00000001")

        snapshot = service.snapshot()

        assert len(snapshot.shortened_links) == 4
        assert len(snapshot.devices) == 1
        assert snapshot.users == {}
        assert snapshot.scans == {}


class TestRequestDecoding:

    def test_user_form_requires_short_and_device_ids(self):
        with pytest.raises(ValidationError) as exc_info:
            UserFormData.decode({"name": "A", "email": "e", "mobile": "1"})

        assert exc_info.value.fields == ["short_id", "device_id"]

    def test_user_form_lists_blank_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            UserFormData.decode({
                "short_id": "s", "device_id": "d", "name": "A", "email": " ", "mobile": "\t"
            })

        assert exc_info.value.fields == ["email", "mobile"]
        assert "All fields are required" in str(exc_info.value)

    def test_direct_scan_ignores_extra_fields(self):
        request = DirectScanRequest.decode({
            "device_id": "d", "user_id": "u", "short_id": "s", "extra": 1
        })

        assert request.short_id == "s"
