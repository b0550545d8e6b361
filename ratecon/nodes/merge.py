import opik

from ratecon.core.form_state import FormState
from ratecon.core.workflow_state import PipelineState
from ratecon.extraction.merge import merge_form_state
from ratecon.nodes.base import BaseNode


class MergeNode(BaseNode):
    name = "merge"

    @opik.track(name="merge_node")
    def run(self, state: PipelineState) -> dict:
        merged = merge_form_state(
            state.get("form_state") or FormState(),
            state["record"],
            state.get("locations"),
        )
        return {"merged_form_state": merged}
