"""Schemas for the people and horoscope endpoints."""

from pydantic import BaseModel, Field

ZODIAC_SIGNS: frozenset[str] = frozenset({
    "aries", "taurus", "gemini", "cancer", "leo", "virgo",
    "libra", "scorpio", "sagittarius", "capricorn", "aquarius", "pisces",
})


class Person(BaseModel):
    """A person and their star sign. id is assigned by the repository on first save."""

    id: str | None = Field(None, description="Repository id; omitted until saved.")
    name: str = Field(..., min_length=1)
    sign: str = Field(..., min_length=1, description="Zodiac sign, e.g. Leo.")


class PersonRequest(BaseModel):
    """Request body for POST /people and PUT /people/{id}."""

    name: str = Field(..., min_length=1)
    sign: str = Field(..., min_length=1, description="Zodiac sign, e.g. Leo.")


class HoroscopeResponse(BaseModel):
    """Response for GET /horoscope/{sign} and GET /people/{id}/horoscope."""

    sign: str
    horoscope: str
    person: Person | None = None
