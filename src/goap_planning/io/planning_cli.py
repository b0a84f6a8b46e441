"""Define a command-line interface for solving planning problems stored in YAML."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Sequence

import click
from rich.table import Table

from goap_planning.facts import satisfies
from goap_planning.io.logging import console
from goap_planning.io.problem_schema import PlanningProblem
from goap_planning.planning import CostAwarePlanner, build_planner, plan_cost
from goap_planning.planning.planner import PLANNING_STRATEGIES

if TYPE_CHECKING:
    from goap_planning.actions import Action


def _render_plan_table(plan: Sequence[Action]) -> Table:
    """Render a numbered table listing the actions of a plan."""
    table = Table(title="Plan", show_lines=False)
    table.add_column("#", justify="right", style="cyan", no_wrap=True)
    table.add_column("Action", style="bold")
    table.add_column("Cost", justify="right", style="magenta")

    for idx, action in enumerate(plan, start=1):
        table.add_row(str(idx), action.name, f"{action.cost:g}")
    return table


@click.command()
@click.argument("problem_yaml", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--strategy",
    type=click.Choice(PLANNING_STRATEGIES),
    default="astar",
    show_default=True,
    help="Planning strategy used to search for a plan.",
)
@click.option("--max-depth", type=click.IntRange(min=0), default=None, help="Backtracking depth bound.")
@click.option("--max-iterations", type=click.IntRange(min=0), default=None, help="A* iteration budget.")
@click.option("--stats", is_flag=True, help="Print search statistics (A* only).")
def cli(
    problem_yaml: Path,
    strategy: str,
    max_depth: int | None,
    max_iterations: int | None,
    stats: bool,
) -> None:
    """Find a plan for the planning problem described in PROBLEM_YAML."""
    problem = PlanningProblem.from_yaml(problem_yaml)
    planner = build_planner(strategy, max_depth=max_depth, max_iterations=max_iterations)

    if stats and isinstance(planner, CostAwarePlanner):
        search = planner.search(problem.state, problem.goal, problem.actions)
        search.log_info()
        plan = search.reconstruct_plan()
    else:
        plan = planner.plan(problem.state, problem.goal, problem.actions)

    if plan:
        console.print(_render_plan_table(plan))
        console.print(f"Total cost: {plan_cost(plan):g}")
    elif satisfies(problem.state, problem.goal):
        console.print("[green]Goal is already satisfied; no actions needed.[/]")
    else:
        console.print("[yellow]No plan found.[/]")


def main() -> None:
    """Run the planning CLI."""
    cli()


if __name__ == "__main__":
    main()
