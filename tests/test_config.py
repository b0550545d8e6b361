"""Unit tests for AppConfig."""
from pathlib import Path

from ratecon.config import AppConfig

PROJECT_ROOT = Path(__file__).parent.parent


class TestAppConfig:
    def test_creates_with_defaults(self):
        config = AppConfig(_env_file=None)
        assert config.llm_provider == "openai"
        assert config.llm_model == "gpt-4o"
        assert config.llm_timeout_seconds == 60
        assert config.llm_max_retries == 1
        assert config.llm_max_tokens == 2500
        assert config.llm_temperature == 0.1
        assert config.renderer == "pdf2image"
        assert config.render_scale == 2.0
        assert config.max_pages == 10
        assert config.max_upload_mb == 20
        assert config.prompt_store == "local"
        assert config.prompts_dir == "prompts"
        assert config.prompt_language == "en"
        assert config.prompt_fallback_language == "en"
        assert config.load_store == "memory"
        assert config.opik_project == "ratecon-extraction"

    def test_max_upload_bytes(self):
        assert AppConfig(max_upload_mb=2, _env_file=None).max_upload_bytes == 2 * 1024 * 1024

    def test_from_yaml(self, tmp_path):
        yaml_content = """\
llm_model: gpt-4o-mini
llm_max_retries: 3
render_scale: 3.0
prompt_language: es
opik_project: my-project
"""
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text(yaml_content)

        config = AppConfig.from_yaml(yaml_file)
        assert config.llm_model == "gpt-4o-mini"
        assert config.llm_max_retries == 3
        assert config.render_scale == 3.0
        assert config.prompt_language == "es"
        assert config.opik_project == "my-project"

    def test_from_empty_yaml(self, tmp_path):
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("")
        assert AppConfig.from_yaml(yaml_file).llm_provider == "openai"

    def test_from_yaml_with_real_config(self):
        config = AppConfig.from_yaml(PROJECT_ROOT / "config.yaml")
        assert config.llm_provider == "openai"
        assert config.renderer == "pdf2image"

    def test_from_yaml_with_eval_config(self):
        config = AppConfig.from_yaml(PROJECT_ROOT / "config.eval.yaml")
        assert config.load_store == "memory"
        assert config.opik_project == "ratecon-extraction-eval"

    def test_for_eval(self):
        config = AppConfig.for_eval()
        assert config.load_store == "memory"
        assert config.prompt_store == "local"
        assert config.prompts_dir == "prompts"

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("LLM_MODEL", "gpt-4.1")
        monkeypatch.setenv("MAX_PAGES", "3")
        config = AppConfig(_env_file=None)
        assert config.llm_model == "gpt-4.1"
        assert config.max_pages == 3

    def test_optional_fields_default_to_none(self):
        config = AppConfig(_env_file=None)
        assert config.llm_base_url is None
        assert config.opik_workspace is None
