from pathlib import Path

import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # LLM
    llm_provider: str = "openai"
    llm_model: str = "gpt-4o"
    llm_base_url: str | None = None
    openai_api_key: str | None = None
    llm_timeout_seconds: float = 60.0
    llm_max_retries: int = 1         # retries for transient errors only
    llm_max_tokens: int = 2500
    llm_temperature: float = 0.1

    # Rendering
    renderer: str = "pdf2image"
    render_scale: float = 2.0        # x 72 DPI
    max_pages: int = 10
    max_upload_mb: int = 20

    # Prompt store
    prompt_store: str = "local"
    prompts_dir: str = "prompts"
    prompt_language: str = "en"
    prompt_fallback_language: str = "en"

    # Persistence
    load_store: str = "memory"

    # Opik
    opik_workspace: str | None = None
    opik_project: str = "ratecon-extraction"
    opik_api_key: str | None = None

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    @classmethod
    def from_yaml(cls, path: str | Path) -> "AppConfig":
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    @classmethod
    def for_eval(cls) -> "AppConfig":
        """Pre-configured for evaluation: in-memory store, real LLM."""
        return cls(
            load_store="memory",
            prompt_store="local",
            prompts_dir="prompts",
            opik_project="ratecon-extraction-eval",
        )
