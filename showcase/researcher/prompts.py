"""Prompt text for each researcher step."""

import json
import textwrap
from typing import Iterable

from showcase.researcher.models import Critique, ResearcherProperties, ResearchReport, SingleLlmReport

# Shown to the model so the JSON it returns binds to ResearchReport
REPORT_JSON_EXAMPLE = json.dumps(
    {
        "text": "A detailed answer...",
        "links": [{"url": "https://example.com/source", "summary": "What this source says"}],
    },
    indent=2,
)

CRITIQUE_JSON_EXAMPLE = json.dumps({"accepted": True, "reasoning": "Why"}, indent=2)


def critique_block(critique: Critique | None) -> str:
    if critique is None:
        return ""
    reasoning = critique.reasoning.strip() or "The previous answer was rejected."
    return f"Critique of previous answer:\n{reasoning}"


def categorize_prompt(topic: str) -> str:
    return textwrap.dedent(f"""\
        Categorize the following user input as QUESTION or DISCUSSION.
        Return JSON: {{"category": "QUESTION"}} or {{"category": "DISCUSSION"}}.

        Topic:
        {topic}
        """)


def answer_question_prompt(props: ResearcherProperties, question: str, critique: Critique | None = None) -> str:
    return "\n".join([
        "Use the web and browser tools to answer the given question.",
        "",
        "You must try to find the answer on the web, and be definite, not vague.",
        "",
        f"Write a detailed report in at most {props.max_word_count} words.",
        "If you can answer the question more briefly, do so.",
        "Including a number of links that are relevant to the topic.",
        "",
        "Example:",
        REPORT_JSON_EXAMPLE,
        "",
        "Question:",
        question,
        "",
        critique_block(critique),
    ]).rstrip() + "\n"


def research_topic_prompt(props: ResearcherProperties, topic: str, critique: Critique | None = None) -> str:
    return "\n".join([
        "Use the web and browser tools to perform deep research on the given topic.",
        "",
        f"Write a detailed report in {props.max_word_count} words,",
        "including a number of links that are relevant to the topic.",
        "",
        "Example:",
        REPORT_JSON_EXAMPLE,
        "",
        "Topic:",
        topic,
        "",
        critique_block(critique),
    ]).rstrip() + "\n"


def critique_prompt(topic: str, merged_report: ResearchReport) -> str:
    return "\n".join([
        "Is this research report satisfactory? Consider the following question:",
        topic,
        "The report is satisfactory if it answers the question with adequate references.",
        "It is possible that the question does not have a clear answer, in which",
        "case the report is satisfactory if it provides a reasonable discussion of the topic.",
        "",
        f"Return JSON like: {CRITIQUE_JSON_EXAMPLE}",
        "",
        merged_report.info_string(verbose=True),
    ]) + "\n"


def format_reports(reports: Iterable[SingleLlmReport]) -> str:
    return "\n\n".join(
        f"Report from {r.model}\n{r.report.info_string(verbose=True)}" for r in reports
    )


def merge_prompt(topic: str, reports: Iterable[SingleLlmReport]) -> str:
    return "\n".join([
        "Merge the following research reports into a single report taking the best of each.",
        f"Consider the user direction: {topic}",
        "",
        "Example:",
        REPORT_JSON_EXAMPLE,
        "",
        format_reports(reports),
    ]) + "\n"
