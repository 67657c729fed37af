"""
Horoscope lookup: one GET against the Horoscope App API.

Responsibility: Turn a sign name into today's horoscope text. Missing fields in the
response degrade to a fallback sentence; transport/HTTP failures raise
ServiceUnavailableError so the API can answer 503.
"""

import logging
from typing import Protocol

import httpx
from pydantic import BaseModel, ValidationError

from showcase.core.config import HOROSCOPE_API_BASE, HOROSCOPE_DAILY_PATH, HTTP_TIMEOUT
from showcase.core.errors import ServiceUnavailableError

logger = logging.getLogger(__name__)

FALLBACK_TEMPLATE = "Unable to retrieve horoscope for {sign} today."


class HoroscopeData(BaseModel):
    date: str | None = None
    horoscope_data: str | None = None


class HoroscopeResponse(BaseModel):
    success: bool | None = None
    status: int | None = None
    data: HoroscopeData | None = None


class HoroscopeService(Protocol):
    def daily_horoscope(self, sign: str) -> str: ...


class HoroscopeAppApiService:
    """HoroscopeService backed by https://horoscope-app-api.vercel.app."""

    def __init__(
        self,
        base_url: str = HOROSCOPE_API_BASE,
        timeout: float = HTTP_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _fetch(self, sign: str) -> HoroscopeResponse | None:
        try:
            with httpx.Client(base_url=self.base_url, timeout=self.timeout, transport=self._transport) as client:
                response = client.get(HOROSCOPE_DAILY_PATH, params={"sign": sign})
                response.raise_for_status()
        except httpx.TimeoutException as e:
            raise ServiceUnavailableError("Horoscope API request timed out.") from e
        except httpx.HTTPStatusError as e:
            raise ServiceUnavailableError(
                f"Horoscope API returned {e.response.status_code}."
            ) from e
        except httpx.HTTPError as e:
            raise ServiceUnavailableError(f"Horoscope API unreachable: {e}") from e
        try:
            return HoroscopeResponse.model_validate(response.json())
        except (ValueError, ValidationError):
            logger.warning("[horoscope] unparseable body for sign=%s: %r", sign, response.text[:200])
            return None

    def daily_horoscope(self, sign: str) -> str:
        """Return today's horoscope for sign, or the fallback sentence when the body lacks it."""
        sign = (sign or "").strip()
        if not sign:
            raise ValueError("sign is required")
        logger.info("[horoscope:daily_horoscope] IN  sign=%s", sign)
        body = self._fetch(sign.lower())
        if body is not None and body.data is not None and body.data.horoscope_data is not None:
            logger.info("[horoscope:daily_horoscope] OUT len=%d", len(body.data.horoscope_data))
            return body.data.horoscope_data
        logger.info("[horoscope:daily_horoscope] OUT fallback for sign=%s", sign)
        return FALLBACK_TEMPLATE.format(sign=sign)


_default_service: HoroscopeService | None = None


def get_horoscope_service() -> HoroscopeService:
    """Process-wide service instance (lazy)."""
    global _default_service
    if _default_service is None:
        _default_service = HoroscopeAppApiService()
    return _default_service


def daily_horoscope(sign: str) -> str:
    return get_horoscope_service().daily_horoscope(sign)
