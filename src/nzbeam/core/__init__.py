# Core calculation engine
from .options import OptionGenerator, generate_options
from .detailed_check import DetailedChecker, run_detailed_check
from .serviceability import (
    ServiceabilityChecker, run_sls_check, solve_curvature_with_yield_check,
    CurvatureSolution, CurvatureSolveFailure
)
