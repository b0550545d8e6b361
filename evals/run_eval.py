"""
Main evaluation runner. Uses opik.evaluate() to run all scenarios
through the extraction pipeline and compute metrics.

Usage:
    python -m evals.generate_fixtures
    python -m evals.run_eval
    python -m evals.run_eval --category multi_page
"""
import json
import argparse
from pathlib import Path

import opik
from opik import Opik
from opik.evaluation import evaluate

from evals.graders.extraction import FieldAccuracy
from evals.graders.trajectory import OutcomeCorrectness, TrajectoryCorrectness

from ratecon.builder import PipelineBuilder
from ratecon.config import AppConfig
from ratecon.core.document import UploadedDocument


SCENARIOS_DIR = Path("evals/scenarios")
FIXTURES_DIR = Path("evals/fixtures")


def load_scenarios(category: str | None = None) -> list[dict]:
    """Load scenarios from JSON files, optionally filtered by category."""
    scenarios = []
    for path in sorted(SCENARIOS_DIR.glob("*.json")):
        with open(path) as f:
            data = json.load(f)
        for s in data["scenarios"]:
            if category is None or s["category"] == category:
                scenarios.append(s)
    return scenarios


def expected_form_state(expected: dict) -> dict:
    """Ground truth comes inline or from the fixture's companion JSON."""
    if "form_state" in expected:
        return expected["form_state"]
    fixture = expected.get("form_state_fixture")
    if fixture:
        with open(FIXTURES_DIR / fixture) as f:
            return json.load(f)
    return {}


def dataset_name(category: str | None = None) -> str:
    return f"ratecon-scenarios-{category or 'all'}"


def to_dataset_items(scenarios: list[dict]) -> list[dict]:
    """Opik requires 'id' to be a UUID, so string ids move to 'scenario_id'."""
    items = []
    for s in scenarios:
        item = {**s}
        item["scenario_id"] = item.pop("id", None)
        items.append(item)
    return items


def build_eval_task(builder: PipelineBuilder):
    """Build the task function that opik.evaluate() will call for each scenario."""

    @opik.track(name="ratecon_eval_case")
    def eval_task(scenario: dict) -> dict:
        fixture_path = FIXTURES_DIR / scenario["input"]["fixture"]
        document = UploadedDocument(
            content=fixture_path.read_bytes(),
            media_type=scenario["input"]["media_type"],
            filename=fixture_path.name,
        )

        result = builder.pipeline().run(document)
        expected = scenario["expected"]

        return {
            "status": result.status.value,
            "stage": result.stage,
            "form_state": result.form_state.model_dump(mode="json"),
            "trajectory": result.trajectory,
            # Pass through expected values for graders
            "expected_status": expected["status"],
            "expected_stage": expected.get("stage"),
            "expected_form_state": expected_form_state(expected),
            "expected_trajectory": expected["trajectory"],
        }

    return eval_task


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--category", type=str, default=None)
    parser.add_argument("--experiment-name", type=str, default=None)
    args = parser.parse_args()

    config = AppConfig.for_eval()
    builder = PipelineBuilder(config)

    scenarios = load_scenarios(args.category)
    client = Opik()
    dataset = client.get_or_create_dataset(dataset_name(args.category))
    dataset.insert(to_dataset_items(scenarios))

    evaluate(
        dataset=dataset,
        task=build_eval_task(builder),
        scoring_metrics=[
            FieldAccuracy(),
            OutcomeCorrectness(),
            TrajectoryCorrectness(),
        ],
        experiment_name=args.experiment_name or "ratecon-extraction-eval",
        experiment_config={
            "llm_model": config.llm_model,
            "render_scale": config.render_scale,
            "category": args.category or "all",
        },
        task_threads=1,
    )


if __name__ == "__main__":
    main()
