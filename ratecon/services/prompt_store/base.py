from abc import ABC, abstractmethod
from typing import Any, Optional

from pydantic import BaseModel, Field


class PromptTemplate(BaseModel):
    """A named prompt template and the parameters it requires."""
    name: str
    template: str
    description: str = ""
    params: list[str] = Field(default_factory=list)


class PromptStore(ABC):
    """Source of prompt templates, addressed as `(category, name)`.

    The extraction prompts live in the `extract` category:
    `get("extract", "instruction")`, `get("extract", "multi_page_note")`, ...
    """

    @abstractmethod
    def get(self, category: str, name: str) -> Optional[PromptTemplate]:
        """Return the template, or None when the store has no such entry."""
        ...

    @staticmethod
    def render(template: PromptTemplate, params: dict[str, Any]) -> str:
        """Fill a template with `params`.

        Raises:
            ValueError: If any parameter declared by the template is missing
        """
        missing = [p for p in template.params if p not in params]
        if missing:
            raise ValueError(
                f"Missing required parameters for template '{template.name}': {missing}"
            )
        return template.template.format(**params)

    def get_and_render(
        self, category: str, name: str, params: Optional[dict[str, Any]] = None
    ) -> str:
        """Look up a template and fill it.

        Raises:
            ValueError: If the template does not exist or a parameter is missing
        """
        template = self.get(category, name)
        if template is None:
            raise ValueError(f"Prompt template '{category}/{name}' not found")
        return self.render(template, params or {})
