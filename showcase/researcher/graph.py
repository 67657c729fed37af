"""
LangGraph researcher: categorize → research with two models in parallel → merge → critique
→ (accept, or redo both research passes with the critique and merge again).

Each node only builds a prompt and picks a model; LangGraph does the scheduling,
the parallel fan-out/join and the redo loop. Rounds are capped by max_research_rounds.
"""

import logging
from typing import Literal, TypedDict

from langgraph.graph import END, StateGraph

from showcase.researcher.llm import create_object
from showcase.researcher.models import (
    Categorization,
    Category,
    Critique,
    ResearcherProperties,
    ResearchReport,
    SingleLlmReport,
)
from showcase.researcher.prompts import (
    answer_question_prompt,
    categorize_prompt,
    critique_prompt,
    merge_prompt,
    research_topic_prompt,
)
from showcase.researcher.tools import WEB_TOOLS

logger = logging.getLogger(__name__)


class ResearchState(TypedDict, total=False):
    topic: str
    categorization: Categorization
    gpt4_report: SingleLlmReport
    claude_report: SingleLlmReport
    merged_report: ResearchReport
    critique: Critique
    final_report: ResearchReport
    accepted: bool
    rounds: int


def makes_the_grade(critique: Critique) -> bool:
    """Report is satisfactory."""
    return critique.accepted


def rejected(critique: Critique) -> bool:
    """Report is unsatisfactory; triggers redo of both research passes."""
    return not critique.accepted


class Researcher:
    """Per-step logic for the research graph. Holds the properties the prompts are built from."""

    def __init__(self, properties: ResearcherProperties | None = None) -> None:
        self.properties = properties or ResearcherProperties.from_config()
        logger.info("[researcher] initialized: %s", self.properties.model_dump())

    # --- steps ---

    def categorize(self, state: ResearchState) -> dict:
        topic = state["topic"]
        logger.info("[graph:categorize] IN  topic=%r", topic)
        categorization = create_object(
            categorize_prompt(topic),
            Categorization,
            model=self.properties.categorizer_model_name,
        )
        logger.info("[graph:categorize] OUT category=%s", categorization.category.value)
        return {"categorization": categorization}

    def research_with(
        self,
        topic: str,
        categorization: Categorization,
        critique: Critique | None,
        model: str,
    ) -> SingleLlmReport:
        """Answer a QUESTION or research a DISCUSSION topic with the given model and the web tools."""
        props = self.properties
        if categorization.category is Category.QUESTION:
            prompt = answer_question_prompt(props, topic, critique)
        else:
            prompt = research_topic_prompt(props, topic, critique)
        report = create_object(
            prompt,
            ResearchReport,
            model=model,
            system=props.system_message(),
            tools=WEB_TOOLS,
        )
        logger.info("[graph:research_with] OUT model=%s text_len=%d links=%d", model, len(report.text), len(report.links))
        return SingleLlmReport(report=report, model=model)

    def research_with_gpt4(self, state: ResearchState) -> dict:
        report = self.research_with(state["topic"], state["categorization"], None, self.properties.openai_model_name)
        return {"gpt4_report": report}

    def redo_research_with_gpt4(self, state: ResearchState) -> dict:
        report = self.research_with(
            state["topic"], state["categorization"], state.get("critique"), self.properties.openai_model_name
        )
        return {"gpt4_report": report}

    def research_with_claude(self, state: ResearchState) -> dict:
        report = self.research_with(state["topic"], state["categorization"], None, self.properties.claude_model_name)
        return {"claude_report": report}

    def redo_research_with_claude(self, state: ResearchState) -> dict:
        report = self.research_with(
            state["topic"], state["categorization"], state.get("critique"), self.properties.claude_model_name
        )
        return {"claude_report": report}

    def merge_reports(self, state: ResearchState) -> dict:
        reports = [state["gpt4_report"], state["claude_report"]]
        rounds = (state.get("rounds") or 0) + 1
        logger.info("[graph:merge_reports] IN  round=%d models=%s", rounds, [r.model for r in reports])
        merged = create_object(
            merge_prompt(state["topic"], reports),
            ResearchReport,
            model=self.properties.merge_model_name,
            system=self.properties.system_message(),
        )
        return {"merged_report": merged, "rounds": rounds}

    def critique_merged_report(self, state: ResearchState) -> dict:
        critique = create_object(
            critique_prompt(state["topic"], state["merged_report"]),
            Critique,
            model=self.properties.critic_model_name,
        )
        logger.info("[graph:critique_merged_report] OUT accepted=%s reasoning=%r", critique.accepted, critique.reasoning[:200])
        return {"critique": critique}

    def accept_report(self, state: ResearchState) -> dict:
        critique = state["critique"]
        return {"final_report": state["merged_report"], "accepted": makes_the_grade(critique)}

    # --- routing ---

    def route_after_critique(self, state: ResearchState) -> Literal["accept_report"] | list[str]:
        critique = state["critique"]
        rounds = state.get("rounds") or 0
        if makes_the_grade(critique):
            next_nodes: str | list[str] = "accept_report"
        elif rounds >= self.properties.max_research_rounds:
            logger.info("[graph:route_after_critique] rounds exhausted (%d); accepting last merge", rounds)
            next_nodes = "accept_report"
        else:
            next_nodes = ["redo_research_with_gpt4", "redo_research_with_claude"]
        logger.info("[graph:route_after_critique] accepted=%s round=%d -> %s", critique.accepted, rounds, next_nodes)
        return next_nodes

    def build_graph(self):
        """
        Build and compile the research graph.
        categorize → (gpt4 ∥ claude) → merge → critique → accept → END
                                        ↑                  │
                                        └ (redo gpt4 ∥ redo claude) ┘
        """
        graph = StateGraph(ResearchState)

        graph.add_node("categorize", self.categorize)
        graph.add_node("research_with_gpt4", self.research_with_gpt4)
        graph.add_node("research_with_claude", self.research_with_claude)
        graph.add_node("redo_research_with_gpt4", self.redo_research_with_gpt4)
        graph.add_node("redo_research_with_claude", self.redo_research_with_claude)
        graph.add_node("merge_reports", self.merge_reports)
        graph.add_node("critique_merged_report", self.critique_merged_report)
        graph.add_node("accept_report", self.accept_report)

        graph.set_entry_point("categorize")
        graph.add_edge("categorize", "research_with_gpt4")
        graph.add_edge("categorize", "research_with_claude")
        # Merge waits for both reports of the same pass
        graph.add_edge(["research_with_gpt4", "research_with_claude"], "merge_reports")
        graph.add_edge(["redo_research_with_gpt4", "redo_research_with_claude"], "merge_reports")
        graph.add_edge("merge_reports", "critique_merged_report")
        graph.add_conditional_edges(
            "critique_merged_report",
            self.route_after_critique,
            ["accept_report", "redo_research_with_gpt4", "redo_research_with_claude"],
        )
        graph.add_edge("accept_report", END)

        return graph.compile()

    def _run_config(self) -> dict:
        # categorize + 4 supersteps per round + accept, with headroom
        return {"recursion_limit": 5 * self.properties.max_research_rounds + 10}


def _initial_state(topic: str) -> ResearchState:
    if not topic or not str(topic).strip():
        raise ValueError("topic is required")
    return {"topic": str(topic).strip(), "rounds": 0}


def run_researcher(topic: str, properties: ResearcherProperties | None = None) -> dict:
    """
    Run the research graph synchronously.
    Returns report (ResearchReport), accepted, rounds, critique, category.
    """
    initial = _initial_state(topic)
    researcher = Researcher(properties)
    logger.info("[run_researcher] START topic=%r", initial["topic"])
    final = researcher.build_graph().invoke(initial, config=researcher._run_config())
    critique: Critique = final["critique"]
    result = {
        "report": final["final_report"],
        "accepted": bool(final.get("accepted")),
        "rounds": final.get("rounds") or 0,
        "critique": critique.reasoning,
        "category": final["categorization"].category.value,
    }
    logger.info("[run_researcher] END accepted=%s rounds=%d", result["accepted"], result["rounds"])
    return result


def run_researcher_stream(topic: str, properties: ResearcherProperties | None = None):
    """
    Run the research graph and yield progress events.
    Each yield is {"event": str, "data": dict}. Events: categorized, report, merged, critique, done, error.
    """
    try:
        initial = _initial_state(topic)
    except ValueError as e:
        yield {"event": "error", "data": {"message": str(e)}}
        return
    researcher = Researcher(properties)
    logger.info("[run_researcher_stream] START topic=%r", initial["topic"])
    try:
        for event in researcher.build_graph().stream(initial, config=researcher._run_config()):
            # event: {node_name: state_update}
            for node_name, update in event.items():
                if not update:
                    continue
                if node_name == "categorize":
                    yield {"event": "categorized", "data": {"category": update["categorization"].category.value}}
                elif "research" in node_name:
                    report: SingleLlmReport = update.get("gpt4_report") or update.get("claude_report")
                    yield {"event": "report", "data": {"node": node_name, "model": report.model}}
                elif node_name == "merge_reports":
                    yield {"event": "merged", "data": {"round": update["rounds"]}}
                elif node_name == "critique_merged_report":
                    critique: Critique = update["critique"]
                    yield {"event": "critique", "data": critique.model_dump()}
                elif node_name == "accept_report":
                    yield {
                        "event": "done",
                        "data": {
                            "report": update["final_report"].model_dump(),
                            "accepted": update["accepted"],
                        },
                    }
    except Exception as e:
        logger.exception("[run_researcher_stream] Research stream failed")
        yield {"event": "error", "data": {"message": str(e)}}
    logger.info("[run_researcher_stream] END")
