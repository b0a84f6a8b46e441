"""Unit tests for the CostAwarePlanner and PlanSearch classes."""

from __future__ import annotations

import gc
import weakref

import pytest
from hypothesis import given

from fact_strategies import action_lists, fact_states
from goap_planning import Action, satisfies
from goap_planning.planning import BacktrackingPlanner, CostAwarePlanner, PlanSearch, plan_cost


@pytest.fixture
def wood_chain() -> list[Action]:
    """Define three actions that must run in sequence (each state allows exactly one action)."""
    return [
        Action("GetAxe", {"HasAxe": False}, {"HasAxe": True}),
        Action("GoToForest", {"HasAxe": True, "AtForest": False}, {"AtForest": True}),
        Action("ChopWood", {"AtForest": True, "HasWood": False}, {"HasWood": True}),
    ]


def test_goal_already_satisfied() -> None:
    """Verify that an empty plan is returned without searching if the goal already holds."""
    # Arrange - An action whose gate would only be evaluated if search began
    def gate() -> bool:
        raise AssertionError("Gate should not be evaluated when the goal already holds.")

    action = Action("Eat", {}, {"IsHungry": False}, can_execute=gate)

    # Act/Assert
    assert CostAwarePlanner().find_plan({"IsHungry": False}, {"IsHungry": False}, [action]) == []


def test_absence_rule_in_goal() -> None:
    """Verify that an absent fact satisfies a false goal but not a true one."""
    planner = CostAwarePlanner()
    assert planner.find_plan({}, {"X": False}, []) == []

    make_x = Action("MakeX", {}, {"X": True})
    assert planner.find_plan({}, {"X": True}, [make_x]) == [make_x]


def test_cost_optimality() -> None:
    """Verify that the cheaper of two disjoint plans is returned."""
    # Arrange - A direct action costing 5, listed before a two-step path costing 2 in total
    expensive = Action("BuyWood", {}, {"HasWood": True}, cost=5.0)
    get_axe = Action("GetAxe", {"HasAxe": False}, {"HasAxe": True}, cost=1.0)
    chop_wood = Action("ChopWood", {"HasAxe": True}, {"HasWood": True}, cost=1.0)

    # Act
    plan = CostAwarePlanner().find_plan({}, {"HasWood": True}, [expensive, get_axe, chop_wood])

    # Assert
    assert plan == [get_axe, chop_wood]
    assert plan_cost(plan) == pytest.approx(2.0)


def test_plan_ordering(wood_chain: list[Action]) -> None:
    """Verify that the reconstructed plan lists actions in execution order."""
    # Arrange - Provide the actions in reverse to ensure that order comes from the search
    reversed_actions = list(reversed(wood_chain))

    # Act
    plan = CostAwarePlanner().find_plan({}, {"HasWood": True}, reversed_actions)

    # Assert
    assert [a.name for a in plan] == ["GetAxe", "GoToForest", "ChopWood"]


def test_iteration_budget(wood_chain: list[Action]) -> None:
    """Verify that search gives up once its iteration budget is spent."""
    # Arrange - Reaching the goal node takes four pops: the root plus one node per action
    planner = CostAwarePlanner()
    goal = {"HasWood": True}

    # Act/Assert - Three iterations are not enough, four are
    assert planner.find_plan({}, goal, wood_chain, max_iterations=3) == []
    assert planner.find_plan({}, goal, wood_chain, max_iterations=4) == wood_chain
    assert planner.find_plan({}, goal, wood_chain, max_iterations=0) == []


def test_configured_budget_used_by_plan(wood_chain: list[Action]) -> None:
    """Verify that `plan()` searches using the planner's configured iteration budget."""
    assert CostAwarePlanner(max_iterations=3).plan({}, {"HasWood": True}, wood_chain) == []
    assert CostAwarePlanner(max_iterations=4).plan({}, {"HasWood": True}, wood_chain) == wood_chain


def test_ties_broken_by_insertion_order() -> None:
    """Verify that among equally good plans, the one using the earlier-listed action wins."""
    walk = Action("Walk", {}, {"AtHome": True})
    drive = Action("Drive", {}, {"AtHome": True})

    assert CostAwarePlanner().find_plan({}, {"AtHome": True}, [walk, drive]) == [walk]
    assert CostAwarePlanner().find_plan({}, {"AtHome": True}, [drive, walk]) == [drive]


def test_repeated_action_allowed() -> None:
    """Verify that the same action may appear more than once in a cost-aware plan."""
    get_axe = Action("GetAxe", {}, {"HasAxe": True})
    chop_wood = Action("ChopWood", {"HasAxe": True}, {"HasAxe": False, "HasWood": True})

    plan = CostAwarePlanner().find_plan({}, {"HasAxe": True, "HasWood": True}, [get_axe, chop_wood])

    assert plan == [get_axe, chop_wood, get_axe]


def test_gated_actions_are_excluded() -> None:
    """Verify that actions whose gate returns false are never expanded."""
    teleport = Action("Teleport", {}, {"AtHome": True}, cost=0.0, can_execute=lambda: False)
    walk = Action("Walk", {}, {"AtHome": True}, cost=3.0)

    assert CostAwarePlanner().find_plan({}, {"AtHome": True}, [teleport, walk]) == [walk]


def test_unreachable_goal() -> None:
    """Verify that an empty plan is returned when the frontier is exhausted."""
    # Arrange - No action ever produces the goal fact
    planner = CostAwarePlanner()
    actions = [Action("GetAxe", {}, {"HasAxe": True})]

    # Act
    plan = planner.find_plan({}, {"HasWood": True}, actions)
    search = planner.search({}, {"HasWood": True}, actions)

    # Assert - Expect that each distinct state was processed once before giving up
    assert plan == []
    assert not search.solved
    assert not search.frontier
    assert len(search.closed) == 2


def test_duplicate_states_expanded_once() -> None:
    """Verify that a state pushed several times is only expanded the first time it is popped."""
    # Arrange - Two actions lead from the start to the same dead-end state
    first = Action("First", {}, {"A": True})
    second = Action("Second", {}, {"A": True})
    search = PlanSearch({}, {"Unreachable": True}, [first, second])

    # Act - Run search until the frontier is exhausted
    while not search.step():
        pass

    # Assert - Root and {A} are expanded; the duplicate pops are discarded
    assert search.nodes_expanded == 2
    assert search.closed == {"", "A=True"}
    assert not search.solved
    assert search.reconstruct_plan() == []


def test_negative_budget_rejected() -> None:
    """Verify that a negative iteration budget raises a ValueError."""
    with pytest.raises(ValueError):
        CostAwarePlanner(max_iterations=-1)


@given(fact_states(), fact_states(max_size=3), action_lists())
def test_cost_aware_plans_are_valid(
    state: dict[str, bool],
    goal: dict[str, bool],
    actions: list[Action],
) -> None:
    """Verify that found plans achieve the goal, and that search finds one whenever DFS does."""
    # Arrange - Keep a copy of the state to check that planning doesn't mutate it
    original_state = dict(state)

    # Act - Use a budget large enough to exhaust the small generated state spaces
    plan = CostAwarePlanner().find_plan(state, goal, actions, max_iterations=10_000)
    dfs_plan = BacktrackingPlanner().plan(state, goal, actions)

    # Assert
    assert state == original_state

    current = dict(state)
    for action in plan:
        assert action.is_applicable(current)
        current = action.apply(current)
    if plan:
        assert satisfies(current, goal)

    if dfs_plan:
        assert plan


def test_search_tree_discarded_after_call(monkeypatch: pytest.MonkeyPatch) -> None:
    """Verify that the planner keeps no search state once a planning call returns."""
    # Arrange - Record a weak reference to every search created during the call
    searches: list[weakref.ref[PlanSearch]] = []
    original_init = PlanSearch.__init__

    def recording_init(self: PlanSearch, *args: object, **kwargs: object) -> None:
        original_init(self, *args, **kwargs)  # type: ignore[arg-type]
        searches.append(weakref.ref(self))

    monkeypatch.setattr(PlanSearch, "__init__", recording_init)
    planner = CostAwarePlanner()

    # Act - Run one unsuccessful and one successful search
    assert planner.find_plan({}, {"Y": True}, [Action("A", {}, {"X": True})]) == []
    make_y = Action("MakeY", {}, {"Y": True})
    assert planner.find_plan({}, {"Y": True}, [make_y]) == [make_y]
    gc.collect()

    # Assert - Expect that both searches (and their node trees) are gone
    assert len(searches) == 2
    assert all(ref() is None for ref in searches)
    assert vars(planner) == {"max_iterations": 1000}


def test_search_reports_statistics(wood_chain: list[Action]) -> None:
    """Verify that `search()` returns a finished search whose plan matches `find_plan()`."""
    planner = CostAwarePlanner()

    search = planner.search({}, {"HasWood": True}, wood_chain)

    assert search.solved
    assert search.steps_taken == 4
    assert search.nodes_expanded == 3
    assert search.reconstruct_plan() == planner.find_plan({}, {"HasWood": True}, wood_chain)
    assert not planner.search({}, {"HasWood": True}, wood_chain, max_iterations=3).solved


def test_gate_errors_propagate() -> None:
    """Verify that an exception raised by an action's gate reaches the caller unchanged."""
    def gate() -> bool:
        raise RuntimeError("gate failed")

    action = Action("Explode", {}, {"HasWood": True}, can_execute=gate)

    with pytest.raises(RuntimeError, match="gate failed"):
        CostAwarePlanner().find_plan({}, {"HasWood": True}, [action])


def test_planning_never_executes_actions(wood_chain: list[Action]) -> None:
    """Verify that searching for a plan never invokes any action's side effect."""
    # Arrange - Copies of the chain (plus a distractor) that record their execution
    calls: list[str] = []
    recording = [
        Action(a.name, a.preconditions, a.effects, execute=lambda n=a.name: calls.append(n))
        for a in wood_chain
    ]
    buy_wood = Action("BuyWood", {}, {"HasWood": True}, cost=9.0, execute=lambda: calls.append("BuyWood"))
    recording.append(buy_wood)

    # Act
    plan = CostAwarePlanner().find_plan({}, {"HasWood": True}, recording)

    # Assert
    assert [a.name for a in plan] == ["GetAxe", "GoToForest", "ChopWood"]
    assert calls == []
