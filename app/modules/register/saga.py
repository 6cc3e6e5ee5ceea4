"""
Minimal saga runner: ordered forward actions, each with an optional
compensating action.

When step N fails, the compensations of the steps that already completed
(1..N-1) run in reverse order. A compensation that fails is logged and
recorded, never retried, and never masks the original error.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

Context = Dict[str, Any]


@dataclass
class SagaStep:
    name: str
    action: Callable[[Context], Any]
    compensate: Optional[Callable[[Context], Any]] = None


@dataclass
class CompensationFailure:
    step: str
    error: Exception


@dataclass(eq=False)
class SagaFailed(Exception):
    step: str
    cause: Exception
    compensated: List[str] = field(default_factory=list)
    compensation_failures: List[CompensationFailure] = field(default_factory=list)

    def __str__(self) -> str:
        return f"saga failed at step '{self.step}': {self.cause}"

    @property
    def rollback_failed(self) -> bool:
        return bool(self.compensation_failures)


class Saga:
    def __init__(
        self,
        name: str,
        steps: List[SagaStep],
        on_compensation_failure: Optional[Callable[[str, Exception, Context], None]] = None,
    ):
        self.name = name
        self.steps = steps
        self.on_compensation_failure = on_compensation_failure

    def run(self, context: Optional[Context] = None) -> Context:
        """Execute every step in order; raise SagaFailed after compensating on the first failure."""
        context = context if context is not None else {}
        completed: List[SagaStep] = []
        for step in self.steps:
            try:
                logger.info(f"[{self.name}] step '{step.name}'")
                step.action(context)
            except Exception as e:
                logger.warning(f"[{self.name}] step '{step.name}' failed: {e}")
                failure = SagaFailed(step=step.name, cause=e)
                self._compensate(completed, context, failure)
                raise failure from e
            completed.append(step)
        return context

    def _compensate(self, completed: List[SagaStep], context: Context, failure: SagaFailed) -> None:
        for step in reversed(completed):
            if step.compensate is None:
                continue
            try:
                logger.warning(f"[{self.name}] compensating '{step.name}'")
                step.compensate(context)
                failure.compensated.append(step.name)
            except Exception as e:
                logger.critical(
                    f"[{self.name}] compensation for '{step.name}' failed, manual cleanup required: {e}"
                )
                failure.compensation_failures.append(CompensationFailure(step=step.name, error=e))
                if self.on_compensation_failure is not None:
                    self.on_compensation_failure(step.name, e, context)
