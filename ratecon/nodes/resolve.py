from ratecon.core.workflow_state import PipelineState
from ratecon.extraction.address import resolve_locations
from ratecon.nodes.base import BaseNode


class ResolveNode(BaseNode):
    name = "resolve"

    def run(self, state: PipelineState) -> dict:
        return {"locations": resolve_locations(state["record"])}
