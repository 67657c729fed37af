"""
Tests for the horoscope lookup. Uses httpx.MockTransport so no network is needed.
"""

import httpx
import pytest

from showcase.core.errors import ServiceUnavailableError
from showcase.services.horoscope_service import HoroscopeAppApiService

BASE = "https://horoscope.test"


def _service(handler) -> HoroscopeAppApiService:
    return HoroscopeAppApiService(base_url=BASE, transport=httpx.MockTransport(handler))


def test_returns_horoscope_text_and_lowercases_sign() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={
            "success": True,
            "status": 200,
            "data": {"date": "Oct 17, 2026", "horoscope_data": "A good day for research."},
        })

    assert _service(handler).daily_horoscope("Leo") == "A good day for research."
    assert seen[0].url.path == "/api/v1/get-horoscope/daily"
    assert seen[0].url.params["sign"] == "leo"


@pytest.mark.parametrize(
    "body",
    [
        {"success": False, "status": 404, "data": None},
        {"success": True, "status": 200},
        {"success": True, "status": 200, "data": {"date": "Oct 17, 2026", "horoscope_data": None}},
        {"success": True, "status": 200, "data": {"date": "Oct 17, 2026"}},
    ],
)
def test_missing_fields_fall_back(body: dict) -> None:
    service = _service(lambda request: httpx.Response(200, json=body))
    assert service.daily_horoscope("Leo") == "Unable to retrieve horoscope for Leo today."


def test_non_json_body_falls_back() -> None:
    service = _service(lambda request: httpx.Response(200, text="<html>oops</html>"))
    assert service.daily_horoscope("pisces") == "Unable to retrieve horoscope for pisces today."


def test_http_error_raises_service_unavailable() -> None:
    service = _service(lambda request: httpx.Response(502, text="bad gateway"))
    with pytest.raises(ServiceUnavailableError) as exc:
        service.daily_horoscope("leo")
    assert "502" in exc.value.message


def test_transport_error_raises_service_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ServiceUnavailableError):
        _service(handler).daily_horoscope("leo")


def test_empty_sign_rejected() -> None:
    service = _service(lambda request: httpx.Response(200, json={}))
    with pytest.raises(ValueError):
        service.daily_horoscope("   ")
