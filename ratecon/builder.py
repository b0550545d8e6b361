"""PipelineBuilder: wires services and nodes based on AppConfig."""
from ratecon.config import AppConfig
from ratecon.nodes.merge import MergeNode
from ratecon.nodes.normalize import NormalizeNode
from ratecon.nodes.parse import ParseNode
from ratecon.nodes.render import RenderNode
from ratecon.nodes.report import ReportNode
from ratecon.nodes.request import RequestNode
from ratecon.nodes.resolve import ResolveNode
from ratecon.nodes.validate import ValidateNode
from ratecon.pipeline import ExtractionPipeline
from ratecon.services.llm.base import VisionLLMService
from ratecon.services.llm.openai import OpenAIVisionLLM
from ratecon.services.load_store.base import LoadStore
from ratecon.services.load_store.memory import InMemoryLoadStore
from ratecon.services.prompt_store.base import PromptStore
from ratecon.services.prompt_store.local import LocalPromptStore
from ratecon.services.renderer.base import DocumentRenderer
from ratecon.services.renderer.pdf2image import Pdf2ImageRenderer
from ratecon.workflow import build_graph


class PipelineBuilder:
    """Builds the extraction graph by wiring services and nodes from config."""

    def __init__(self, config: AppConfig):
        self.config = config

        self._renderer = self._build_renderer()
        self._llm = self._build_llm()
        self._prompt_store = self._build_prompt_store()
        self._load_store = self._build_load_store()
        self._graph = None

    @property
    def load_store(self) -> LoadStore:
        return self._load_store

    @property
    def prompt_store(self) -> PromptStore:
        return self._prompt_store

    def build(self):
        """Build (once) and return the compiled LangGraph pipeline."""
        if self._graph is None:
            nodes = {
                "render": RenderNode(renderer=self._renderer),
                "request": RequestNode(llm=self._llm, prompt_store=self._prompt_store),
                "parse": ParseNode(),
                "validate": ValidateNode(),
                "normalize": NormalizeNode(),
                "resolve": ResolveNode(),
                "merge": MergeNode(),
                "report": ReportNode(),
            }
            self._graph = build_graph(nodes)
        return self._graph

    def pipeline(self) -> ExtractionPipeline:
        """A fresh pipeline (one per upload control) over the shared compiled graph."""
        return ExtractionPipeline(self.build())

    def _build_renderer(self) -> DocumentRenderer:
        if self.config.renderer == "pdf2image":
            return Pdf2ImageRenderer(
                scale=self.config.render_scale,
                max_pages=self.config.max_pages,
                max_bytes=self.config.max_upload_bytes,
            )
        raise ValueError(f"Unknown renderer: {self.config.renderer}")

    def _build_llm(self) -> VisionLLMService:
        if self.config.llm_provider == "openai":
            return OpenAIVisionLLM(
                model=self.config.llm_model,
                api_key=self.config.openai_api_key,
                base_url=self.config.llm_base_url,
                timeout=self.config.llm_timeout_seconds,
                max_retries=self.config.llm_max_retries,
                max_tokens=self.config.llm_max_tokens,
                temperature=self.config.llm_temperature,
            )
        raise ValueError(f"Unknown LLM provider: {self.config.llm_provider}")

    def _build_prompt_store(self) -> PromptStore:
        if self.config.prompt_store == "local":
            return LocalPromptStore(
                prompts_dir=self.config.prompts_dir,
                language=self.config.prompt_language,
                fallback_language=self.config.prompt_fallback_language,
            )
        raise ValueError(f"Unknown prompt store: {self.config.prompt_store}")

    def _build_load_store(self) -> LoadStore:
        if self.config.load_store == "memory":
            return InMemoryLoadStore()
        raise ValueError(f"Unknown load store: {self.config.load_store}")
