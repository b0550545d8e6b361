from pathlib import Path
from typing import Optional

import yaml

from ratecon.services.prompt_store.base import PromptStore, PromptTemplate


class LocalPromptStore(PromptStore):
    """YAML prompt files on disk, one directory per language.

        prompts/
        ├── en/
        │   └── extract.yaml      # category "extract"
        └── es/
            └── extract.yaml      # may override only some entries

    Each top-level key of a category file is one template:

        multi_page_note:
            template: |
                This is a {page_count}-page document...
            params:
                - page_count

    Lookups try `language` first, then `fallback_language`. Parsed files are
    cached per language.
    """

    def __init__(self, prompts_dir: str | Path, language: str = "en", fallback_language: str = "en"):
        self._base_dir = Path(prompts_dir)
        self._languages = [language] if language == fallback_language else [language, fallback_language]
        self._cache: dict[str, dict | None] = {}

        if not self._base_dir.is_dir():
            raise FileNotFoundError(f"Prompts directory not found: {self._base_dir}")

    @property
    def language(self) -> str:
        return self._languages[0]

    def get(self, category: str, name: str) -> Optional[PromptTemplate]:
        for lang in self._languages:
            entries = self._load(category, lang)
            if entries and name in entries:
                entry = entries[name]
                return PromptTemplate(
                    name=f"{category}.{name}",
                    template=entry["template"],
                    description=entry.get("description", ""),
                    params=entry.get("params") or [],
                )
        return None

    def _load(self, category: str, lang: str) -> dict | None:
        key = f"{lang}/{category}"
        if key not in self._cache:
            path = self._base_dir / lang / f"{category}.yaml"
            if path.exists():
                with open(path, encoding="utf-8") as f:
                    self._cache[key] = yaml.safe_load(f) or {}
            else:
                self._cache[key] = None
        return self._cache[key]
