"""
API handlers: call services, map results/errors to HTTP.

Responsibility: Bridge HTTP types and services. Marshalling and exception-to-HTTP mapping.
Lives in the API layer so services stay free of FastAPI/HTTP types.
"""

import logging
from typing import Callable, TypeVar

from fastapi import HTTPException

from showcase.core.errors import LlmResponseError, ServiceUnavailableError
from showcase.schemas.people import ZODIAC_SIGNS

logger = logging.getLogger(__name__)

R = TypeVar("R")


def validate_sign(sign: str) -> str:
    """Normalize a sign name; 400 if it is not one of the twelve zodiac signs."""
    normalized = (sign or "").strip().lower()
    if normalized not in ZODIAC_SIGNS:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown sign {sign!r}. Expected one of: {', '.join(sorted(ZODIAC_SIGNS))}",
        )
    return normalized


def call_service(fn: Callable[[], R]) -> R:
    """
    Run a service call and map its errors:
    ValueError → 400, ServiceUnavailableError → 503, LlmResponseError / anything else → 500.
    """
    try:
        return fn()
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except ServiceUnavailableError as e:
        logger.warning("Service unavailable: %s", e.message)
        raise HTTPException(status_code=503, detail=e.message) from e
    except LlmResponseError as e:
        logger.warning("Unusable LLM output: %s", e.message)
        raise HTTPException(status_code=500, detail=e.message) from e
    except Exception as e:
        logger.exception("Service call failed")
        raise HTTPException(status_code=500, detail=str(e)) from e
