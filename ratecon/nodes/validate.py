import opik

from ratecon.core.workflow_state import PipelineState
from ratecon.extraction.validation import validate_record
from ratecon.nodes.base import BaseNode


class ValidateNode(BaseNode):
    name = "validate"

    @opik.track(name="validate_node")
    def run(self, state: PipelineState) -> dict:
        record, warnings = validate_record(state.get("payload") or {})
        return {
            "record": record,
            "payload": None,
            "warnings": state.get("warnings", []) + warnings,
        }
