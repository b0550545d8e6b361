from ratecon.core.workflow_state import PipelineState
from ratecon.extraction.normalize import normalize_record
from ratecon.nodes.base import BaseNode


class NormalizeNode(BaseNode):
    name = "normalize"

    def run(self, state: PipelineState) -> dict:
        return {"record": normalize_record(state["record"])}
