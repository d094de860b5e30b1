"""
Workflow Engine

Runs a sequence of named steps with compensation (undo) actions.

A step returns a StepResponse holding its output and the input its
compensation needs. When a later step raises, every completed step's
compensation runs in reverse order, then the run reports the error.

Usage:
    create_brands = Step("create-brands", invoke=_create, compensate=_delete)

    def _definition(ctx, names):
        return ctx.run(create_brands, names)

    workflow = Workflow("sync-brands", _definition)
    result = workflow.run(["Essence"], container)
    if result.errors:
        ...
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass
class StepResponse:
    """Step output plus the data its compensation receives."""
    output: Any = None
    compensation_input: Any = None


@dataclass
class Step:
    """
    A named unit of work.

    invoke(input, container) -> StepResponse
    compensate(compensation_input, container) -> None
    """
    name: str
    invoke: Callable[[Any, Any], StepResponse]
    compensate: Optional[Callable[[Any, Any], None]] = None


@dataclass
class WorkflowError:
    step: str
    error: Exception

    def __str__(self) -> str:
        return f"{self.step}: {self.error}"


@dataclass
class WorkflowResult:
    result: Any = None
    errors: List[WorkflowError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class StepFailed(Exception):
    """Wraps the exception raised inside a step with the step's name."""

    def __init__(self, step: str, error: Exception):
        super().__init__(f"Step {step!r} failed: {error}")
        self.step = step
        self.error = error


class WorkflowContext:
    """Executes steps for one run and remembers what to compensate."""

    def __init__(self, workflow_name: str, container: Any):
        self.workflow_name = workflow_name
        self.container = container
        self.completed: List[Tuple[Step, Any]] = []

    def run(self, step: Step, step_input: Any = None) -> Any:
        """Invoke a step and return its output."""
        logger.debug("[%s] running step %s", self.workflow_name, step.name)
        try:
            response = step.invoke(step_input, self.container)
        except Exception as e:
            raise StepFailed(step.name, e) from e

        if not isinstance(response, StepResponse):
            response = StepResponse(output=response)

        self.completed.append((step, response.compensation_input))
        return response.output

    def compensate(self) -> None:
        """Run compensations of completed steps, last step first."""
        for step, compensation_input in reversed(self.completed):
            if step.compensate is None:
                continue
            logger.info("[%s] compensating step %s", self.workflow_name, step.name)
            try:
                step.compensate(compensation_input, self.container)
            except Exception as e:
                logger.error("[%s] compensation of %s failed: %s",
                             self.workflow_name, step.name, e)
        self.completed.clear()


class Workflow:
    """
    A named workflow built from a definition function.

    The definition receives a WorkflowContext and the workflow input, runs
    steps through ``ctx.run(step, input)`` and returns the workflow result.
    """

    def __init__(self, name: str, definition: Callable[[WorkflowContext, Any], Any]):
        self.name = name
        self.definition = definition

    def run(self, workflow_input: Any, container: Any, throw_on_error: bool = False) -> WorkflowResult:
        """
        Execute the workflow.

        Args:
            workflow_input: Input passed to the definition
            container: Services resolved by the steps
            throw_on_error: Re-raise the step's exception after compensating

        Returns:
            WorkflowResult with the result, or the errors of a failed run
        """
        ctx = WorkflowContext(self.name, container)
        try:
            result = self.definition(ctx, workflow_input)
        except StepFailed as e:
            logger.error("[%s] %s", self.name, e)
            ctx.compensate()
            if throw_on_error:
                raise e.error
            return WorkflowResult(errors=[WorkflowError(step=e.step, error=e.error)])

        return WorkflowResult(result=result)
