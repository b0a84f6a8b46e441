"""Import classes and definitions used for input/output or user interfaces."""

from .logging import console as console
from .logging import log_info as log_info
from .problem_schema import PlanningProblem as PlanningProblem
from .problem_schema import ProblemSchema as ProblemSchema
