from ratecon.core.workflow_state import PipelineState
from ratecon.extraction.request import build_extraction_messages
from ratecon.nodes.base import BaseNode
from ratecon.services.llm.base import VisionLLMService
from ratecon.services.prompt_store.base import PromptStore


class RequestNode(BaseNode):
    name = "request"

    def __init__(self, llm: VisionLLMService, prompt_store: PromptStore):
        self.llm = llm
        self.prompt_store = prompt_store

    def run(self, state: PipelineState) -> dict:
        # Page buffers are released as soon as the request is built, before the network call.
        with state["rendered"] as pages:
            messages = build_extraction_messages(pages, pages.page_count, self.prompt_store)

        raw_response = self.llm.generate_text(messages)

        return {
            "rendered": None,
            "raw_response": raw_response,
        }
