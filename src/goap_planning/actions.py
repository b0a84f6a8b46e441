"""Define classes to represent actions available to a goal-oriented planner."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Mapping

from goap_planning.facts import FactState, apply_effects, satisfies


def _always() -> bool:
    """Return True (default executability gate)."""
    return True


def _do_nothing() -> None:
    """Perform no side effect (default execution callback)."""


@dataclass(frozen=True, eq=False)
class Action:
    """A named unit of behavior with preconditions, effects, and a cost.

    Actions compare and hash by identity: two actions with equal fields remain distinct.
    """

    name: str
    preconditions: Mapping[str, bool]
    """Facts that must hold before the action may be chosen."""

    effects: Mapping[str, bool]
    """Facts set (added or overwritten) in the state resulting from the action."""

    can_execute: Callable[[], bool] = field(default=_always, repr=False)
    """Runtime gate evaluated at planning time, independent of the fact state."""

    execute: Callable[[], None] = field(default=_do_nothing, repr=False)
    """Side-effecting operation, invoked only by the execution layer (never by planners)."""

    cost: float = 1.0

    def __post_init__(self) -> None:
        """Freeze the action's preconditions and effects, then validate its cost."""
        object.__setattr__(self, "preconditions", MappingProxyType(dict(self.preconditions)))
        object.__setattr__(self, "effects", MappingProxyType(dict(self.effects)))

        if not self.cost >= 0:  # Also rejects NaN
            raise ValueError(f"Action '{self.name}' requires a non-negative cost, got {self.cost}.")

    def __str__(self) -> str:
        """Return a readable string representation of the action."""
        return self.name

    def is_executable(self) -> bool:
        """Evaluate the action's runtime executability gate."""
        return bool(self.can_execute())

    def is_applicable(self, state: FactState) -> bool:
        """Evaluate whether the action's preconditions hold in the given fact state."""
        return satisfies(state, self.preconditions)

    def apply(self, state: FactState) -> dict[str, bool]:
        """Compute the fact state resulting from choosing this action (no side effects run)."""
        return apply_effects(state, self.effects)

    def run(self) -> None:
        """Invoke the action's side-effecting operation."""
        self.execute()


class ActionBuilder:
    """Fluent builder for Action objects."""

    def __init__(self) -> None:
        """Initialize the builder with the defaults of an unnamed, free, no-op action."""
        self._name = "UnnamedAction"
        self._preconditions: dict[str, bool] = {}
        self._effects: dict[str, bool] = {}
        self._can_execute: Callable[[], bool] = _always
        self._execute: Callable[[], None] = _do_nothing
        self._cost = 1.0

    def named(self, name: str) -> ActionBuilder:
        """Set the name of the action."""
        self._name = name
        return self

    def requires(self, fact: str, value: bool = True) -> ActionBuilder:
        """Require the fact to have the given value before the action may be chosen."""
        self._preconditions[fact] = value
        return self

    def causes(self, fact: str, value: bool = True) -> ActionBuilder:
        """Set the fact to the given value in the state resulting from the action."""
        self._effects[fact] = value
        return self

    def when(self, can_execute: Callable[[], bool]) -> ActionBuilder:
        """Gate the action on a zero-argument callable evaluated at planning time."""
        self._can_execute = can_execute
        return self

    def does(self, execute: Callable[[], None]) -> ActionBuilder:
        """Set the side effect invoked when the action is executed."""
        self._execute = execute
        return self

    def costs(self, cost: float) -> ActionBuilder:
        """Set the non-negative cost of the action."""
        self._cost = cost
        return self

    def build(self) -> Action:
        """Construct the action described by the builder.

        :raises ValueError: If the configured cost is negative or NaN
        """
        return Action(
            name=self._name,
            preconditions=self._preconditions,
            effects=self._effects,
            can_execute=self._can_execute,
            execute=self._execute,
            cost=self._cost,
        )
