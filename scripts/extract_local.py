"""Local end-to-end run: one rate confirmation file → merged form JSON.

Usage:
    uv run python scripts/extract_local.py path/to/ratecon.pdf
    uv run python scripts/extract_local.py scan.png --form existing_form.json

This script:
1. Builds the real pipeline (pdf2image renderer + OpenAI vision model)
2. Reads the document and an optional FormState snapshot
3. Runs one extraction and prints the result

Requires .env with: OPENAI_API_KEY (and poppler installed for PDFs)
"""
# ruff: noqa: E402
import argparse
import json
import mimetypes
import sys
from pathlib import Path

project_root = str(Path(__file__).parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from dotenv import load_dotenv
load_dotenv(Path(project_root) / ".env")

from ratecon.builder import PipelineBuilder
from ratecon.config import AppConfig
from ratecon.core.document import UploadedDocument
from ratecon.core.form_state import FormState


def main():
    parser = argparse.ArgumentParser(description="Extract a rate confirmation into a load form")
    parser.add_argument("path", type=Path)
    parser.add_argument("--form", type=Path, default=None, help="JSON FormState to merge into")
    parser.add_argument("--config", type=Path, default=Path(project_root) / "config.yaml")
    args = parser.parse_args()

    config = AppConfig.from_yaml(args.config)
    config.prompts_dir = str(Path(project_root) / config.prompts_dir)
    print(f"Config: llm={config.llm_model}, render_scale={config.render_scale}")

    media_type, _ = mimetypes.guess_type(args.path.name)
    document = UploadedDocument(
        content=args.path.read_bytes(),
        media_type=media_type or "application/octet-stream",
        filename=args.path.name,
    )
    print(f"Loaded {document.filename} ({document.size} bytes, {document.media_type})\n")

    form_state = FormState()
    if args.form:
        form_state = FormState.model_validate(json.loads(args.form.read_text()))

    pipeline = PipelineBuilder(config).pipeline()
    print("Running render → request → parse → validate → normalize → resolve → merge...")
    result = pipeline.run(document, form_state)

    print("=" * 60)
    print(f"  Status:     {result.status.value}")
    print(f"  Message:    {result.message}")
    print(f"  Pages:      {result.page_count}")
    print(f"  Trajectory: {' → '.join(result.trajectory)}")
    if result.stage:
        print(f"  Failed at:  {result.stage} ({result.error_kind}): {result.error_detail}")
    for warning in result.warnings:
        print(f"  Warning:    {warning}")
    print("=" * 60)
    print(json.dumps(result.form_state.model_dump(mode="json"), indent=2))

    sys.exit(0 if result.succeeded else 1)


if __name__ == "__main__":
    main()
