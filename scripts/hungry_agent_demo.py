"""Demonstrate planning and executing a plan for a hungry agent in a small world.

The agent's world is a dictionary of facts; each action's side effect updates it. After
each executed action the agent re-plans from the updated facts, as an agent loop would.

To run this script, use the command:

    python scripts/hungry_agent_demo.py --strategy astar

"""

from __future__ import annotations

import click

from goap_planning import Action, ActionBuilder, PlanExecutor, satisfies
from goap_planning.io import console
from goap_planning.planning import build_planner, plan_cost
from goap_planning.planning.planner import PLANNING_STRATEGIES

MAX_REPLANS = 10
"""Number of planning rounds before the demo gives up."""


def build_actions(world: dict[str, bool]) -> list[Action]:
    """Create actions whose side effects update the given world facts."""
    return [
        ActionBuilder()
        .named("OrderTakeout")
        .requires("HasMoney")
        .causes("HasFood")
        .causes("HasMoney", False)
        .does(lambda: world.update(HasFood=True, HasMoney=False))
        .costs(6.0)
        .build(),
        ActionBuilder()
        .named("GoToKitchen")
        .requires("InKitchen", False)
        .causes("InKitchen")
        .does(lambda: world.update(InKitchen=True))
        .build(),
        ActionBuilder()
        .named("Cook")
        .requires("InKitchen")
        .requires("HasIngredients")
        .causes("HasFood")
        .causes("HasIngredients", False)
        .when(lambda: world.get("StoveWorks", False))
        .does(lambda: world.update(HasFood=True, HasIngredients=False))
        .costs(2.0)
        .build(),
        ActionBuilder()
        .named("Eat")
        .requires("HasFood")
        .causes("IsHungry", False)
        .causes("HasFood", False)
        .does(lambda: world.update(IsHungry=False, HasFood=False))
        .build(),
    ]


@click.command()
@click.option("--strategy", type=click.Choice(PLANNING_STRATEGIES), default="astar", show_default=True)
@click.option("--broken-stove", is_flag=True, help="Make cooking unavailable to the agent.")
def main(strategy: str, broken_stove: bool) -> None:
    """Plan and execute actions until the agent is no longer hungry."""
    world = {"IsHungry": True, "HasMoney": True, "HasIngredients": True, "StoveWorks": not broken_stove}
    goal = {"IsHungry": False}
    actions = build_actions(world)
    planner = build_planner(strategy)

    for _ in range(MAX_REPLANS):
        plan = planner.plan(world, goal, actions)
        if not plan:
            break

        names = " -> ".join(a.name for a in plan)
        console.print(f"Plan (cost {plan_cost(plan):g}): [bold]{names}[/]")

        outcome = PlanExecutor(plan).execute_next()
        color = "green" if outcome.success else "red"
        console.print(f"[{color}]{outcome.message}[/]")

    if satisfies(world, goal):
        console.print("[green]The agent is no longer hungry.[/]")
    else:
        console.print("[yellow]The agent could not find a way to eat.[/]")


if __name__ == "__main__":
    main()
