from opik.evaluation.metrics import BaseMetric
from opik.evaluation.metrics.score_result import ScoreResult


class TrajectoryCorrectness(BaseMetric):
    """Checks that the pipeline visited the expected sequence of stages."""
    name = "trajectory_correctness"

    def score(self, trajectory: list[str], expected_trajectory: list[str], **kwargs) -> ScoreResult:
        correct = trajectory == expected_trajectory
        return ScoreResult(
            value=1.0 if correct else 0.0,
            name=self.name,
            reason=f"Expected {expected_trajectory}, got {trajectory}",
        )


class OutcomeCorrectness(BaseMetric):
    """Checks the final pipeline status and, for failures, the stage that failed."""
    name = "outcome_correctness"

    def score(
        self,
        status: str,
        expected_status: str,
        stage: str | None = None,
        expected_stage: str | None = None,
        **kwargs,
    ) -> ScoreResult:
        if status != expected_status:
            return ScoreResult(value=0.0, name=self.name, reason=f"Expected status {expected_status}, got {status}")
        if expected_stage is not None and stage != expected_stage:
            return ScoreResult(value=0.0, name=self.name, reason=f"Expected failure at {expected_stage}, got {stage}")
        return ScoreResult(value=1.0, name=self.name, reason=f"status={status}, stage={stage}")
