"""
Push the local rate-confirmation scenarios to Opik datasets ahead of a run.

One dataset holds every scenario and there is one per category. Items carry
their ground-truth form inline, so experiments reviewed in the Opik UI do not
need the generated fixtures on disk.

Usage:
    python -m evals.generate_fixtures
    python -m evals.sync_dataset
    python -m evals.sync_dataset --category multi_page
"""
import argparse
from collections import defaultdict

from opik import Opik

from evals.run_eval import dataset_name, expected_form_state, load_scenarios, to_dataset_items


def with_ground_truth(scenario: dict) -> dict:
    expected = {**scenario["expected"]}
    expected["form_state"] = expected_form_state(expected)
    expected.pop("form_state_fixture", None)
    return {**scenario, "expected": expected}


def group_by_dataset(scenarios: list[dict], category: str | None = None) -> dict[str, list[dict]]:
    """Dataset name -> items. Without a category, the combined dataset is included too."""
    items = to_dataset_items([with_ground_truth(s) for s in scenarios])
    groups = defaultdict(list)
    for item in items:
        groups[dataset_name(item["category"])].append(item)
    if category is None:
        groups[dataset_name()] = items
    return dict(groups)


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--category", type=str, default=None)
    args = parser.parse_args()

    scenarios = load_scenarios(args.category)
    if not scenarios:
        parser.error(f"no scenarios found for category {args.category!r}")

    client = Opik()
    for name, items in sorted(group_by_dataset(scenarios, args.category).items()):
        client.get_or_create_dataset(name).insert(items)
        print(f"Synced {len(items)} scenarios to '{name}'")


if __name__ == "__main__":
    main()
