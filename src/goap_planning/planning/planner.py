"""Define the interface shared by goal-oriented action planners."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence

from goap_planning.planning.backtracking_planner import BacktrackingPlanner
from goap_planning.planning.cost_aware_planner import CostAwarePlanner

if TYPE_CHECKING:
    from goap_planning.actions import Action
    from goap_planning.facts import FactState, Goal

PLANNING_STRATEGIES = ("astar", "backtracking")
"""Names of the available planning strategies."""


class Planner(Protocol):
    """A planner orders actions to transform a fact state into one satisfying a goal."""

    def plan(self, state: FactState, goal: Goal, actions: Sequence[Action]) -> list[Action]:
        """Find an ordered list of actions achieving the goal from the given state.

        :param state: Current fact state (never mutated)
        :param goal: Required fact values
        :param actions: Candidate actions; their order affects tie-breaking
        :return: Actions in execution order, or an empty list if no plan was found
        """
        ...


def plan_cost(plan: Sequence[Action]) -> float:
    """Compute the total cost of the given plan."""
    return sum(action.cost for action in plan)


def build_planner(
    strategy: str,
    max_depth: int | None = None,
    max_iterations: int | None = None,
) -> Planner:
    """Construct a planner implementing the named strategy.

    :param strategy: Either "astar" (cost-aware search) or "backtracking"
    :param max_depth: Optional depth bound for the backtracking planner
    :param max_iterations: Optional iteration budget for the cost-aware planner
    :return: Configured planner
    :raises ValueError: If the strategy name is not recognized
    """
    if strategy == "astar":
        if max_iterations is None:
            return CostAwarePlanner()
        return CostAwarePlanner(max_iterations=max_iterations)

    if strategy == "backtracking":
        if max_depth is None:
            return BacktrackingPlanner()
        return BacktrackingPlanner(max_depth=max_depth)

    raise ValueError(f"Unknown planning strategy '{strategy}' (expected {PLANNING_STRATEGIES}).")
