"""Pydantic models for validating planning problem YAML files.

Example problem file:

    state:
      HasAxe: false
    goal:
      HasWood: true
    actions:
      - name: GetAxe
        effects: {HasAxe: true}
        cost: 2.0
      - name: ChopWood
        preconditions: {HasAxe: true}
        effects: {HasWood: true}
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from goap_planning.actions import Action
from goap_planning.io.logging import log_info
from goap_planning.io.yaml_utils import load_yaml_data


class ActionSchema(BaseModel):
    """Schema for a single action available to the planner."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    preconditions: Dict[str, bool] = Field(default_factory=dict)
    effects: Dict[str, bool] = Field(default_factory=dict)
    cost: float = Field(default=1.0, ge=0, description="Non-negative cost used by A* search")
    executable: bool = Field(default=True, description="Constant result of the runtime gate")

    def to_action(self) -> Action:
        """Convert the schema into an Action with a constant gate and no side effect."""
        executable = self.executable
        return Action(
            name=self.name,
            preconditions=self.preconditions,
            effects=self.effects,
            can_execute=lambda: executable,
            cost=self.cost,
        )


class ProblemSchema(BaseModel):
    """Schema for a planning problem: a fact state, a goal, and the available actions."""

    model_config = ConfigDict(extra="forbid")

    state: Dict[str, bool] = Field(default_factory=dict)
    goal: Dict[str, bool]
    actions: List[ActionSchema] = Field(default_factory=list)


@dataclass(frozen=True)
class PlanningProblem:
    """A planning problem ready to be passed to a planner."""

    state: dict[str, bool]
    goal: dict[str, bool]
    actions: list[Action]

    @classmethod
    def from_schema(cls, schema: ProblemSchema) -> PlanningProblem:
        """Construct a planning problem from validated schema data."""
        return cls(
            state=dict(schema.state),
            goal=dict(schema.goal),
            actions=[a.to_action() for a in schema.actions],
        )

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> PlanningProblem:
        """Load a planning problem from a YAML file.

        :param yaml_path: Path to a YAML file matching ProblemSchema
        :return: Constructed planning problem
        :raises FileNotFoundError: If the file doesn't exist
        :raises RuntimeError: If the file isn't valid YAML (or isn't a mapping)
        :raises KeyError: If the file has no `goal` key
        :raises pydantic.ValidationError: If the data doesn't match the problem schema
        """
        yaml_data = load_yaml_data(yaml_path, required_keys={"goal"})
        problem = cls.from_schema(ProblemSchema.model_validate(yaml_data))
        log_info(f"Loaded planning problem with {len(problem.actions)} actions from {yaml_path}.")
        return problem
