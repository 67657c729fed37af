"""
API route aggregator: register endpoints; no logic, only delegate to services via handlers.
"""

import json
import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse

from showcase.api.handlers import call_service, validate_sign
from showcase.researcher.graph import run_researcher, run_researcher_stream
from showcase.schemas.people import HoroscopeResponse, Person, PersonRequest
from showcase.schemas.research import ResearchRequest, ResearchResponse
from showcase.services import people_service
from showcase.services.horoscope_service import daily_horoscope

logger = logging.getLogger(__name__)
router = APIRouter()


# --- System ---

@router.get("/", tags=["system"])
def root():
    return {"status": "Agent showcase running"}


@router.get("/health", tags=["system"])
def health():
    return {"ok": True}


# --- Horoscope ---

@router.get(
    "/horoscope/{sign}",
    response_model=HoroscopeResponse,
    tags=["horoscope"],
    summary="Today's horoscope for a sign",
    description="Looks the sign up on the Horoscope App API. 400 on unknown sign, 503 if the API is unreachable.",
)
def get_horoscope(sign: str) -> HoroscopeResponse:
    normalized = validate_sign(sign)
    text = call_service(lambda: daily_horoscope(normalized))
    return HoroscopeResponse(sign=normalized, horoscope=text)


# --- People ---

def _person_or_404(person: Person | None, person_id: str) -> Person:
    if person is None:
        raise HTTPException(status_code=404, detail=f"Person not found: {person_id!r}")
    return person


@router.post("/people", response_model=Person, status_code=201, tags=["people"], summary="Create a person")
def create_person(body: PersonRequest) -> Person:
    sign = validate_sign(body.sign)
    return people_service.create_person(body.name.strip(), sign)


@router.get("/people", tags=["people"], summary="List people")
def list_people() -> dict:
    people = people_service.list_people()
    return {"people": [p.model_dump() for p in people], "count": len(people)}


@router.get("/people/{person_id}", response_model=Person, tags=["people"], summary="Get a person")
def get_person(person_id: str) -> Person:
    return _person_or_404(people_service.get_person(person_id), person_id)


@router.put("/people/{person_id}", response_model=Person, tags=["people"], summary="Replace a person")
def update_person(person_id: str, body: PersonRequest) -> Person:
    sign = validate_sign(body.sign)
    return _person_or_404(people_service.update_person(person_id, body.name.strip(), sign), person_id)


@router.delete("/people/{person_id}", tags=["people"], summary="Delete a person")
def delete_person(person_id: str) -> dict:
    if not people_service.delete_person(person_id):
        raise HTTPException(status_code=404, detail=f"Person not found: {person_id!r}")
    return {"deleted": True}


@router.delete("/people", tags=["people"], summary="Delete everyone")
def clear_people() -> dict:
    return {"cleared": True, "removed": people_service.clear_people()}


@router.get(
    "/people/{person_id}/horoscope",
    response_model=HoroscopeResponse,
    tags=["people"],
    summary="Today's horoscope for a stored person",
)
def get_person_horoscope(person_id: str) -> HoroscopeResponse:
    found = call_service(lambda: people_service.person_horoscope(person_id))
    if found is None:
        raise HTTPException(status_code=404, detail=f"Person not found: {person_id!r}")
    person, text = found
    return HoroscopeResponse(sign=person.sign, horoscope=text, person=person)


# --- Research ---

@router.post(
    "/research",
    response_model=ResearchResponse,
    tags=["research"],
    summary="Run the researcher (sync)",
    description="Categorize, research with two models, merge, critique, redo until accepted or the round cap. "
                "400 on invalid input, 503 when the LLM is not configured/unreachable, 500 on agent failure.",
)
def post_research(body: ResearchRequest) -> ResearchResponse:
    logger.info("[api:post_research] IN  topic=%r", body.topic)
    result = call_service(lambda: run_researcher(body.topic))
    logger.info("[api:post_research] OUT accepted=%s rounds=%d", result["accepted"], result["rounds"])
    return ResearchResponse(**result)


def _sse_generator(topic: str):
    """Yield Server-Sent Events for the research run."""
    try:
        for evt in run_researcher_stream(topic):
            yield f"event: {evt['event']}\ndata: {json.dumps(evt['data'], default=str)}\n\n"
    except Exception as e:
        logger.exception("SSE stream failed")
        yield f"event: error\ndata: {json.dumps({'message': str(e)})}\n\n"


@router.post(
    "/research/stream",
    tags=["research"],
    summary="Run the researcher (SSE stream)",
    description="Stream progress via Server-Sent Events. Events: categorized, report, merged, critique, done, error.",
)
def post_research_stream(body: ResearchRequest) -> StreamingResponse:
    logger.info("[api:post_research_stream] IN  topic=%r", body.topic)
    return StreamingResponse(
        _sse_generator(body.topic),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
