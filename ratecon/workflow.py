"""LangGraph definition of the extraction pipeline.

    render → request → parse → validate → normalize → resolve → merge → report
       ↘         ↘        ↘         ↘           ↘          ↘        ↘
                        report (as soon as any stage records an error)
"""
from langgraph.graph import END, StateGraph

from ratecon.core.workflow_state import PipelineState
from ratecon.nodes.base import BaseNode

STAGES = ["render", "request", "parse", "validate", "normalize", "resolve", "merge"]


def route_after(next_stage: str):
    """Continue to `next_stage`, or jump to report once a stage has failed."""

    def route(state: PipelineState) -> str:
        if state.get("error_message"):
            return "report"
        return next_stage

    route.__name__ = f"route_to_{next_stage}"
    return route


def build_graph(nodes: dict[str, BaseNode]):
    """Build and compile the pipeline graph from nodes keyed by stage name.

    Returns a compiled LangGraph that can be invoked with a PipelineState.
    """
    missing = [name for name in [*STAGES, "report"] if name not in nodes]
    if missing:
        raise ValueError(f"Missing pipeline nodes: {missing}")

    graph = StateGraph(PipelineState)

    for name in [*STAGES, "report"]:
        graph.add_node(name, nodes[name])

    graph.set_entry_point(STAGES[0])

    for current, following in zip(STAGES, STAGES[1:] + ["report"]):
        if following == "report":
            graph.add_edge(current, "report")
        else:
            graph.add_conditional_edges(
                current,
                route_after(following),
                {following: following, "report": "report"},
            )

    graph.add_edge("report", END)

    return graph.compile()
