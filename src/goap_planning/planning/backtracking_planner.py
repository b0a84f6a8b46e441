"""Define a fast (but incomplete) planner using a greedy pass and depth-bounded backtracking."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from goap_planning.facts import satisfies
from goap_planning.io.logging import logger

if TYPE_CHECKING:
    from goap_planning.actions import Action
    from goap_planning.facts import FactState, Goal

DEFAULT_MAX_DEPTH = 5
"""Maximum number of actions in a plan found by backtracking."""


class BacktrackingPlanner:
    """Planner trying a single matching action, then depth-first search over action sequences.

    The search never reuses an action within one partial plan, so goals that require the
    same action twice are unreachable. The first plan found is returned, which need not be
    the cheapest or the shortest.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        """Initialize the planner with a bound on plan length.

        :param max_depth: Maximum number of actions explored along any search branch
        """
        if max_depth < 0:
            raise ValueError(f"Maximum search depth must be non-negative, got {max_depth}.")
        self.max_depth = max_depth

    def plan(self, state: FactState, goal: Goal, actions: Sequence[Action]) -> list[Action]:
        """Find a sequence of actions achieving the goal from the given state.

        :return: Actions in execution order, or an empty list if the goal already holds
            or no plan exists within the depth bound
        """
        if satisfies(state, goal):
            return []

        executable = [a for a in actions if a.is_executable()]

        for action in executable:
            if action.is_applicable(state) and satisfies(action.apply(state), goal):
                logger.debug(f"Single action '{action}' achieves the goal.")
                return [action]

        plan = self._search(state, goal, executable, partial_plan=[])
        if not plan:
            logger.debug(f"No plan found within depth {self.max_depth}.")
        return plan

    def _search(
        self,
        state: FactState,
        goal: Goal,
        actions: list[Action],
        partial_plan: list[Action],
    ) -> list[Action]:
        """Recursively extend the partial plan depth-first, in the given action order."""
        if len(partial_plan) >= self.max_depth:
            return []

        used_ids = {id(a) for a in partial_plan}

        for action in actions:
            if id(action) in used_ids or not action.is_applicable(state):
                continue

            next_state = action.apply(state)
            next_plan = [*partial_plan, action]
            if satisfies(next_state, goal):
                return next_plan

            found = self._search(next_state, goal, actions, next_plan)
            if found:
                return found

        return []
