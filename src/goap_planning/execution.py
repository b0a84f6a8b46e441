"""Define a minimal execution layer that runs planned actions one at a time."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from goap_planning.io.logging import logger

if TYPE_CHECKING:
    from goap_planning.actions import Action


@dataclass(frozen=True)
class Outcome:
    """The outcome of executing one step of a plan, or a run of several steps."""

    success: bool
    message: str
    action: Action | None = None
    """Last action attempted (None if no action was attempted)."""

    steps_executed: int = 0
    """Number of actions whose side effects ran to produce this outcome."""

    def __bool__(self) -> bool:
        """Evaluate the outcome as its success flag."""
        return self.success


class PlanExecutor:
    """Executes the actions of a plan in order, re-checking each action's gate first.

    The world may change between planning and execution, so an action whose gate fails
    at execution time marks the whole plan as failed. Re-planning is left to the caller.
    """

    def __init__(self, plan: Sequence[Action]) -> None:
        """Initialize the executor with the plan it will step through."""
        self.plan = list(plan)
        self._next_idx = 0
        self._failed = False

    @property
    def is_complete(self) -> bool:
        """Check whether every action of the plan has been executed."""
        return self._next_idx >= len(self.plan)

    @property
    def has_failed(self) -> bool:
        """Check whether an action of the plan was blocked by its gate at execution time."""
        return self._failed

    @property
    def remaining(self) -> list[Action]:
        """Retrieve the actions not yet executed, in execution order."""
        return self.plan[self._next_idx :]

    def execute_next(self) -> Outcome:
        """Execute the next action in the plan, if its executability gate allows it.

        :return: Outcome of the step, carrying the action that was attempted (if any)
        """
        if self._failed:
            return Outcome(False, "Plan has already failed.")
        if self.is_complete:
            return Outcome(False, "Plan has no remaining actions.")

        action = self.plan[self._next_idx]
        if not action.is_executable():
            self._failed = True
            logger.debug(f"Action '{action}' can no longer execute; plan failed.")
            return Outcome(False, f"Action '{action}' cannot currently execute.", action)

        action.run()
        self._next_idx += 1
        return Outcome(True, f"Executed action '{action}'.", action, steps_executed=1)

    def run_to_completion(self) -> Outcome:
        """Execute the remaining actions until the plan completes or an action is blocked.

        :return: Outcome counting the actions executed by this call
        """
        executed = 0
        last_action: Action | None = None
        while not self.is_complete:
            outcome = self.execute_next()
            if not outcome:
                return Outcome(False, outcome.message, outcome.action, steps_executed=executed)
            executed += 1
            last_action = outcome.action

        return Outcome(True, f"Plan completed after {executed} actions.", last_action, executed)
