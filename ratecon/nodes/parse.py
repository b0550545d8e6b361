from ratecon.core.workflow_state import PipelineState
from ratecon.extraction.parser import parse_response
from ratecon.nodes.base import BaseNode


class ParseNode(BaseNode):
    name = "parse"

    def run(self, state: PipelineState) -> dict:
        return {"payload": parse_response(state.get("raw_response", ""))}
