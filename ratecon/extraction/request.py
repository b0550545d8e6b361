from collections.abc import Iterable

from ratecon.core.document import RenderedPage
from ratecon.core.extraction_schema import schema_field_guide
from ratecon.services.prompt_store.base import PromptStore


def build_instruction(page_count: int, prompt_store: PromptStore) -> str:
    multi_page_note = ""
    if page_count > 1:
        multi_page_note = prompt_store.get_and_render("extract", "multi_page_note", {
            "page_count": page_count,
        })
    return prompt_store.get_and_render("extract", "instruction", {
        "multi_page_note": multi_page_note,
        "field_guide": schema_field_guide(),
    })


def build_extraction_messages(
    pages: Iterable[RenderedPage], page_count: int, prompt_store: PromptStore
) -> list[dict]:
    """Build the single chat request for one upload: instruction, then every page in order."""
    content: list[dict] = [{"type": "text", "text": build_instruction(page_count, prompt_store)}]
    for page in sorted(pages, key=lambda p: p.page_number):
        content.append({
            "type": "image_url",
            "image_url": {"url": page.data_url(), "detail": "high"},
        })

    if len(content) - 1 != page_count:
        raise ValueError(f"Expected {page_count} page image(s), got {len(content) - 1}")

    return [
        {"role": "system", "content": prompt_store.get_and_render("extract", "system")},
        {"role": "user", "content": content},
    ]
