"""Reinforced concrete and masonry beam design to NZS 3101 / NZS 4230."""

from nzbeam.core import (
    generate_options, run_detailed_check, run_sls_check, solve_curvature_with_yield_check,
)

__version__ = "0.1.0"
