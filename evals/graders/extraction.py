from opik.evaluation.metrics import BaseMetric
from opik.evaluation.metrics.score_result import ScoreResult


class FieldAccuracy(BaseMetric):
    """Field-level accuracy of the merged form. Only fields present in the ground truth are scored."""
    name = "field_accuracy"

    def score(self, form_state: dict | None, expected_form_state: dict | None, **kwargs) -> ScoreResult:
        if not expected_form_state:
            return ScoreResult(value=1.0, name=self.name, reason="No ground truth fields")

        if form_state is None:
            return ScoreResult(value=0.0, name=self.name, reason="No form returned")

        correct = 0
        total = len(expected_form_state)
        mismatches = []

        for field, expected in expected_form_state.items():
            actual = form_state.get(field)
            if self._normalize(actual) == self._normalize(expected):
                correct += 1
            else:
                mismatches.append(f"{field}: expected '{expected}', got '{actual}'")

        return ScoreResult(
            value=correct / total,
            name=self.name,
            reason=f"{correct}/{total} fields correct. Mismatches: {mismatches}" if mismatches else f"{correct}/{total} fields correct",
        )

    @staticmethod
    def _normalize(value) -> str:
        """Normalize for comparison: lowercase, strip whitespace, None as blank."""
        if value is None:
            return ""
        return str(value).strip().lower()
