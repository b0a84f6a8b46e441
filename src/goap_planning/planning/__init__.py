"""Import planners that order actions to achieve goals over fact states."""

from .backtracking_planner import BacktrackingPlanner as BacktrackingPlanner
from .cost_aware_planner import CostAwarePlanner as CostAwarePlanner
from .cost_aware_planner import PlanNode as PlanNode
from .cost_aware_planner import PlanSearch as PlanSearch
from .planner import Planner as Planner
from .planner import build_planner as build_planner
from .planner import plan_cost as plan_cost
