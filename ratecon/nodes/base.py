from abc import ABC, abstractmethod

from ratecon.core.errors import PipelineError
from ratecon.core.workflow_state import PipelineState


class BaseNode(ABC):
    """Base class for pipeline nodes.

    Subclasses set `name` as a class variable and implement `run`, which
    returns the state update. `__call__` appends the node to the trajectory,
    passes through once an earlier node has failed, and turns exceptions into
    error fields on the state so the graph can route to the report node.
    """

    name: str  # Class variable, set by each subclass (e.g. name = "render")

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if not getattr(cls, 'name', None) and 'Abstract' not in cls.__name__:
            raise TypeError(f"{cls.__name__} must define a 'name' class variable")

    def __call__(self, state: PipelineState) -> dict:
        trajectory = state.get("trajectory", []) + [self.name]

        if state.get("error_message"):
            return {"trajectory": trajectory}

        try:
            update = self.run(state)
        except PipelineError as e:
            return {
                "error_stage": e.stage,
                "error_kind": type(e).__name__,
                "error_message": e.message,
                "trajectory": trajectory,
            }
        except Exception as e:
            return {
                "error_stage": self.name,
                "error_kind": type(e).__name__,
                "error_message": f"{type(self).__name__} failed: {e}",
                "trajectory": trajectory,
            }

        return {**update, "trajectory": trajectory}

    @abstractmethod
    def run(self, state: PipelineState) -> dict:
        """Execute node logic. Returns a dict that updates the state."""
        ...
