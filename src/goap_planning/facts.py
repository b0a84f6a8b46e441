"""Define functions operating on fact states (maps from fact names to Boolean values).

A fact absent from a state is treated as False: it fails an expectation of True and
matches an expectation of False. Goal satisfaction and precondition matching both
follow this rule.
"""

from __future__ import annotations

from typing import Mapping

FactState = Mapping[str, bool]
"""A snapshot of named Boolean facts about the world or an agent."""

Goal = FactState
"""A fact state read as a set of required fact values."""


def fact_holds(state: FactState, name: str, expected: bool) -> bool:
    """Evaluate whether a fact has the expected value in a state (absent facts are False)."""
    return state.get(name, False) == expected


def satisfies(state: FactState, required: FactState) -> bool:
    """Evaluate whether every required fact value holds in the given state.

    :param state: Fact state being tested
    :param required: Required fact values (e.g., a goal or an action's preconditions)
    :return: True if all required values hold under the absence-as-false rule
    """
    return all(fact_holds(state, name, value) for name, value in required.items())


def count_unsatisfied(state: FactState, goal: Goal) -> int:
    """Count the goal facts that do not currently hold in the given state."""
    return sum(1 for name, value in goal.items() if not fact_holds(state, name, value))


def apply_effects(state: FactState, effects: FactState) -> dict[str, bool]:
    """Create a new fact state by overwriting the given state with effects.

    Facts not mentioned by the effects carry over unchanged. The input state is not mutated.
    """
    successor = dict(state)
    successor.update(effects)
    return successor


def serialize_state(state: FactState) -> str:
    """Serialize a fact state into a canonical string (names sorted lexicographically)."""
    return ";".join(f"{name}={state[name]}" for name in sorted(state))
