"""
Researcher data carriers and configuration.

These are plain records passed between graph nodes; they have no lifecycle of their own.
"""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field

from showcase.core import config
from showcase.core.errors import ServiceUnavailableError


class Category(str, Enum):
    QUESTION = "QUESTION"
    DISCUSSION = "DISCUSSION"


class Categorization(BaseModel):
    category: Category = Field(..., description="QUESTION if the input asks something answerable, else DISCUSSION.")


class InternetResource(BaseModel):
    url: str
    summary: str = ""


class ResearchReport(BaseModel):
    text: str = Field(..., description="The report body.")
    links: list[InternetResource] = Field(default_factory=list, description="Relevant links with a short summary each.")

    def info_string(self, verbose: bool = True, indent: int = 0) -> str:
        """Render for inclusion in another prompt. Non-verbose drops the link summaries."""
        pad = " " * indent
        lines = [f"{pad}Report:", f"{pad}{self.text}"]
        if self.links:
            lines.append(f"{pad}Links:")
            for link in self.links:
                if verbose and link.summary:
                    lines.append(f"{pad}- {link.url}: {link.summary}")
                else:
                    lines.append(f"{pad}- {link.url}")
        return "\n".join(lines)


class SingleLlmReport(BaseModel):
    """A report together with the model that wrote it."""

    report: ResearchReport
    model: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Critique(BaseModel):
    accepted: bool = Field(..., description="True if the report is satisfactory.")
    reasoning: str = Field("", description="Why the report was accepted or rejected.")


class ResponseFormat(str, Enum):
    MARKDOWN = "markdown"
    HTML = "html"
    PLAIN_TEXT = "plain_text"

    def contribution(self) -> str:
        if self is ResponseFormat.MARKDOWN:
            return "Format the report text in Markdown."
        if self is ResponseFormat.HTML:
            return "Format the report text as HTML fragments (no <html> or <body> tags)."
        return "Write the report text as plain text with no markup."


class Persona(BaseModel):
    name: str
    description: str
    voice: str
    objective: str

    def contribution(self) -> str:
        return (
            f"You are {self.name}.\n"
            f"Your persona: {self.description}.\n"
            f"Your objective is {self.objective}.\n"
            f"Your voice: {self.voice}."
        )


class ResearcherProperties(BaseModel):
    response_format: ResponseFormat = ResponseFormat.MARKDOWN
    max_word_count: int = Field(300, gt=0)
    max_research_rounds: int = Field(3, ge=1)
    categorizer_model_name: str
    claude_model_name: str
    openai_model_name: str
    critic_model_name: str
    merge_model_name: str
    persona_name: str
    persona_description: str
    persona_voice: str
    persona_objective: str

    @classmethod
    def from_config(cls) -> "ResearcherProperties":
        """Build from env config. Invalid values are a server misconfiguration, not a bad request."""
        try:
            return cls._from_config()
        except ValueError as e:
            raise ServiceUnavailableError(f"Researcher is misconfigured: {e}") from e

    @classmethod
    def _from_config(cls) -> "ResearcherProperties":
        return cls(
            response_format=ResponseFormat(config.RESEARCHER_RESPONSE_FORMAT.lower()),
            max_word_count=config.RESEARCHER_MAX_WORD_COUNT,
            max_research_rounds=config.RESEARCHER_MAX_ROUNDS,
            categorizer_model_name=config.RESEARCHER_CATEGORIZER_MODEL,
            claude_model_name=config.RESEARCHER_CLAUDE_MODEL,
            openai_model_name=config.RESEARCHER_OPENAI_MODEL,
            critic_model_name=config.RESEARCHER_CRITIC_MODEL,
            merge_model_name=config.RESEARCHER_MERGE_MODEL,
            persona_name=config.RESEARCHER_PERSONA_NAME,
            persona_description=config.RESEARCHER_PERSONA_DESCRIPTION,
            persona_voice=config.RESEARCHER_PERSONA_VOICE,
            persona_objective=config.RESEARCHER_PERSONA_OBJECTIVE,
        )

    @property
    def persona(self) -> Persona:
        return Persona(
            name=self.persona_name,
            description=self.persona_description,
            voice=self.persona_voice,
            objective=self.persona_objective,
        )

    def prompt_contributions(self) -> list[str]:
        return [self.response_format.contribution(), self.persona.contribution()]

    def system_message(self) -> str:
        return "\n\n".join(self.prompt_contributions())
