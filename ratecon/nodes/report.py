import opik

from ratecon.core.workflow_state import PipelineState
from ratecon.nodes.base import BaseNode


class ReportNode(BaseNode):
    name = "report"

    @opik.track(name="report_node")
    def __call__(self, state: PipelineState) -> dict:
        return {
            **self.run(state),
            "trajectory": state.get("trajectory", []) + ["report"],
        }

    def run(self, state: PipelineState) -> dict:
        if state.get("error_message") or state.get("merged_form_state") is None:
            final_status = "failed"
        else:
            final_status = "succeeded"
        return {"final_status": final_status}
