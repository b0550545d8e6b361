from ratecon.core.workflow_state import PipelineState
from ratecon.nodes.base import BaseNode
from ratecon.services.renderer.base import DocumentRenderer


class RenderNode(BaseNode):
    name = "render"

    def __init__(self, renderer: DocumentRenderer):
        self.renderer = renderer

    def run(self, state: PipelineState) -> dict:
        rendered = self.renderer.render(state["document"])
        return {
            "rendered": rendered,
            "page_count": rendered.page_count,
        }
