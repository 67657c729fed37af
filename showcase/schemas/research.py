"""Schemas for the research endpoint."""

from pydantic import BaseModel, Field

from showcase.researcher.models import ResearchReport


class ResearchRequest(BaseModel):
    """Request body for POST /research and POST /research/stream."""

    topic: str = Field(..., min_length=1, description="Question or discussion topic to research.")


class ResearchResponse(BaseModel):
    """Response for POST /research."""

    report: ResearchReport = Field(..., description="Final merged report.")
    accepted: bool = Field(..., description="False when the critic never accepted and the round cap was hit.")
    rounds: int = Field(..., description="Number of research/merge/critique passes.")
    critique: str = Field("", description="Reasoning of the last critique.")
    category: str = Field(..., description="QUESTION or DISCUSSION.")

    model_config = {
        "json_schema_extra": {
            "examples": [{
                "report": {"text": "...", "links": [{"url": "https://example.com", "summary": "..."}]},
                "accepted": True,
                "rounds": 1,
                "critique": "Answers the question with references.",
                "category": "QUESTION",
            }]
        }
    }
