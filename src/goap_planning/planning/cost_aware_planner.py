"""Define a cost-aware A* planner over fact states.

Reference: Section 3.5.2 (pg. 85-86) of AIMA (4th Ed.) by Russell and Norvig.
"""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

from goap_planning.facts import FactState, count_unsatisfied, satisfies, serialize_state
from goap_planning.io.logging import console, logger

if TYPE_CHECKING:
    from goap_planning.actions import Action
    from goap_planning.facts import Goal

DEFAULT_MAX_ITERATIONS = 1000
"""Default number of nodes popped from the frontier before search gives up."""


@dataclass(order=True)
class PlanNode:
    """A node in the search tree (represents a particular sequence of actions to a state).

    Nodes are ordered by f-value, then by insertion order, so that the frontier always yields
    the earliest-inserted node among those with the lowest estimated total cost.
    """

    f: float
    """Estimated total cost of the best plan continuing through this node."""

    order: int
    """Position of the node in the order nodes were pushed onto the frontier."""

    g: float = field(compare=False)
    """Running cost of the actions from the root node to this node."""

    h: float = field(compare=False)
    state: dict[str, bool] = field(compare=False)
    action: Action | None = field(default=None, compare=False)
    parent: PlanNode | None = field(default=None, compare=False)


def unsatisfied_goal_heuristic(state: FactState, goal: Goal) -> float:
    """Estimate cost-to-go as the number of goal facts not yet holding in the state."""
    return float(count_unsatisfied(state, goal))


class PlanSearch:
    """State of a single A* search from one fact state toward a goal.

    Duplicate states may be pushed onto the frontier several times; each serialized state
    is expanded at most once, when it is first popped.
    """

    def __init__(self, start: FactState, goal: Goal, actions: Sequence[Action]) -> None:
        """Initialize the search with its root node.

        :param start: Initial fact state (copied, never mutated)
        :param goal: Required fact values
        :param actions: Candidate actions, expanded in the given order
        """
        self.goal = dict(goal)
        self.actions = list(actions)

        self.frontier: list[PlanNode] = []
        """Heap of nodes yet to be expanded."""

        self.closed: set[str] = set()
        """Serialized states that have already been processed."""

        self._counter = itertools.count()
        self._num_step_calls: int = 0
        self._nodes_expanded: int = 0
        self._solution_node: PlanNode | None = None

        self._push(dict(start), action=None, parent=None, g=0.0)

    @property
    def steps_taken(self) -> int:
        """Retrieve the number of search steps (frontier pops) taken so far."""
        return self._num_step_calls

    @property
    def nodes_expanded(self) -> int:
        """Retrieve the number of nodes whose successors were added to the frontier."""
        return self._nodes_expanded

    @property
    def solved(self) -> bool:
        """Check whether the search has reached a goal node."""
        return self._solution_node is not None

    def _push(
        self,
        state: dict[str, bool],
        action: Action | None,
        parent: PlanNode | None,
        g: float,
    ) -> None:
        """Push a new node for the given state onto the frontier."""
        h = unsatisfied_goal_heuristic(state, self.goal)
        node = PlanNode(
            f=g + h,
            order=next(self._counter),
            g=g,
            h=h,
            state=state,
            action=action,
            parent=parent,
        )
        heapq.heappush(self.frontier, node)

    def step(self) -> bool:
        """Pop the best node from the frontier and expand it unless already processed.

        :return: True if search is complete (goal reached or frontier exhausted), else False
        """
        if not self.frontier:
            return True

        self._num_step_calls += 1
        current = heapq.heappop(self.frontier)

        state_key = serialize_state(current.state)
        if state_key in self.closed:
            return False
        self.closed.add(state_key)

        if satisfies(current.state, self.goal):
            self._solution_node = current
            return True

        for action in self.actions:
            if not action.is_executable() or not action.is_applicable(current.state):
                continue
            self._push(action.apply(current.state), action, current, current.g + action.cost)

        self._nodes_expanded += 1
        return False

    def reconstruct_plan(self) -> list[Action]:
        """Reconstruct the actions leading to the solution node, in execution order.

        :return: List of actions, or an empty list if no solution was found
        """
        plan: list[Action] = []
        current = self._solution_node
        while current is not None and current.action is not None:
            plan.append(current.action)
            current = current.parent
        plan.reverse()
        return plan

    def log_info(self) -> None:
        """Log the current state of the search to the console."""
        console.print(f"Current frontier size: {len(self.frontier)}.")
        console.print(f"Processed states: {len(self.closed)}.")
        console.print(f"Search steps taken: {self._num_step_calls}.")
        console.print(f"Nodes expanded: {self._nodes_expanded}.")


class CostAwarePlanner:
    """Planner finding minimum-cost plans by A* search within an iteration budget.

    The planner holds no search state between calls; each search tree is owned by one call.
    """

    def __init__(self, max_iterations: int = DEFAULT_MAX_ITERATIONS) -> None:
        """Initialize the planner with its default iteration budget."""
        if max_iterations < 0:
            raise ValueError(f"Iteration budget must be non-negative, got {max_iterations}.")
        self.max_iterations = max_iterations

    def plan(self, state: FactState, goal: Goal, actions: Sequence[Action]) -> list[Action]:
        """Find a plan using the planner's configured iteration budget."""
        return self.find_plan(state, goal, actions, max_iterations=self.max_iterations)

    def search(
        self,
        state: FactState,
        goal: Goal,
        actions: Sequence[Action],
        max_iterations: int | None = None,
    ) -> PlanSearch:
        """Run A* search and return the finished search (for its plan and statistics).

        :param max_iterations: Maximum number of frontier pops (defaults to the planner's budget)
        :return: Search that either reached a goal node, exhausted its frontier, or ran out of budget
        """
        budget = self.max_iterations if max_iterations is None else max_iterations

        search = PlanSearch(state, goal, actions)
        while search.steps_taken < budget:
            if search.step():
                break

        if search.solved:
            logger.debug(f"Reached the goal after {search.steps_taken} search steps.")
        else:
            logger.debug(f"No plan found after {search.steps_taken} search steps.")
        return search

    def find_plan(
        self,
        state: FactState,
        goal: Goal,
        actions: Sequence[Action],
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
    ) -> list[Action]:
        """Search for a minimum-cost sequence of actions achieving the goal.

        :param state: Current fact state (never mutated)
        :param goal: Required fact values
        :param actions: Candidate actions
        :param max_iterations: Maximum number of frontier pops before giving up
        :return: Actions in execution order, or an empty list if the goal already holds,
            is unreachable, or was not reached within the iteration budget
        """
        if satisfies(state, goal):
            return []

        return self.search(state, goal, actions, max_iterations).reconstruct_plan()
