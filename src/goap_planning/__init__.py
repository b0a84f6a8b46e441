"""Goal-oriented action planning over Boolean fact states."""

from .actions import Action as Action
from .actions import ActionBuilder as ActionBuilder
from .execution import Outcome as Outcome
from .execution import PlanExecutor as PlanExecutor
from .facts import FactState as FactState
from .facts import Goal as Goal
from .facts import satisfies as satisfies
