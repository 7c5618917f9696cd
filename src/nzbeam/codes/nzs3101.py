"""
NZS 3101 code provisions for rectangular beams.

Key clauses implemented:
- Clause 7.4.2.7: Stress block factor β1
- Clause 9.3.8.1: Minimum longitudinal reinforcement
- Clause 9.3.9.3: Shear strength of concrete, vc
- Clause 9.3.9.4: Minimum area and spacing of shear reinforcement
- Clause 6.8.3: Effective moment of inertia
"""

import math
from typing import Tuple

from nzbeam.utils import section
from .base_code import DesignCode


class NZS3101(DesignCode):
    """
    NZS 3101 - Concrete Structures Standard.

    Masonry sections use the same flexural provisions (NZS 4230 follows
    NZS 3101 for the stress block); only the masonry shear strength vm
    differs and is supplied by the user.
    """

    # Maximum stirrup spacing (clause 9.3.9.4.12)
    SPACING_FACTOR_NORMAL = 0.5
    SPACING_CAP_NORMAL = 600.0
    SPACING_FACTOR_HIGH_SHEAR = 0.25
    SPACING_CAP_HIGH_SHEAR = 300.0

    # Neutral axis limit as a fraction of the balanced depth
    DUCTILITY_RATIO = 0.75

    @property
    def code_name(self) -> str:
        return "NZS 3101:2006"

    def get_beta1(self, fc: float) -> float:
        return section.beta1(fc)

    def get_minimum_flexural_steel(self, fc: float, fy: float, breadth: float, d: float) -> float:
        """
        Minimum tension reinforcement per Clause 9.3.8.1.

        As,min = max(√f'c / (4fy), 1.4 / fy) × b × d
        """
        return max(
            section.minimum_flexural_steel(fc, fy, breadth, d),
            (1.4 / fy) * breadth * d,
        )

    def get_neutral_axis_limit(self, d: float, eps_cu: float, eps_s: float) -> float:
        """
        c ≤ 0.75 cb, where cb = d × εcu / (εcu + εs) is the balanced depth.
        """
        cb = d * (eps_cu / (eps_cu + eps_s))
        return self.DUCTILITY_RATIO * cb

    def get_basic_shear_stress(self, fc: float, fy: float, rho: float) -> float:
        """
        Basic shear stress vb = (0.07 + 10ρ)√f'c, bounded to [0.08√f'c, 0.2√f'c].

        Zero for reinforcement weaker than 20 MPa (treated as unreinforced masonry).
        """
        if fy < 20:
            return 0.0
        vb_min = 0.08 * math.sqrt(fc)
        vb_max = 0.2 * math.sqrt(fc)
        return min(max((0.07 + 10 * rho) * math.sqrt(fc), vb_min), vb_max)

    def get_concrete_shear_stress(self, fc: float, fy: float, rho: float, d: float) -> float:
        """
        Concrete shear stress vc per Clause 9.3.9.3.4.

        - d ≤ 200 mm:        vc = max(0.98 vb, 0.17 × 0.98 √f'c)
        - 200 < d ≤ 400 mm:  vc = 0.98 vb
        - d > 400 mm:        vc = 0.98 (400/d)^0.25 vb

        Capped at vn,max.
        """
        vb = self.get_basic_shear_stress(fc, fy, rho)
        if d <= 200:
            vc = max(0.98 * vb, 0.17 * 0.98 * math.sqrt(fc))
        elif d > 400:
            vc = 0.98 * (400 / d) ** 0.25 * vb
        else:
            vc = 0.98 * vb
        return min(vc, self.get_maximum_shear_stress(fc))

    def get_maximum_shear_stress(self, fc: float) -> float:
        """vn,max = min(0.2 f'c, 8 MPa)."""
        return min(0.2 * fc, 8.0)

    def get_minimum_stirrup_rate(self, fc: float, breadth: float, fys: float) -> float:
        """Av,min / s = (1/16) √f'c × b / fys (Clause 9.3.9.4.15)."""
        return (1 / 16) * math.sqrt(fc) * breadth / fys

    def high_shear_threshold(self, fc: float, breadth: float, d: float) -> float:
        """Vs above 0.33√f'c b d tightens the stirrup spacing limit (N)."""
        return 0.33 * math.sqrt(fc) * breadth * d

    def get_maximum_stirrup_spacing(self, d: float, high_shear: bool) -> Tuple[float, str]:
        if high_shear:
            return min(self.SPACING_FACTOR_HIGH_SHEAR * d, self.SPACING_CAP_HIGH_SHEAR), "High shear"
        return min(self.SPACING_FACTOR_NORMAL * d, self.SPACING_CAP_NORMAL), "Default"

    def get_maximum_leg_spacing(self, d: float) -> float:
        return min(self.SPACING_FACTOR_NORMAL * d, self.SPACING_CAP_NORMAL)

    def get_modulus_of_rupture(self, fc: float) -> float:
        """fr = 0.6 √f'c (Clause 5.2.4)."""
        return 0.6 * math.sqrt(fc)

    def get_long_term_factor(self, rho_c: float) -> float:
        """Kcs = 2 / (1 + 50 ρc) for sustained load deflection."""
        return 2 / (1 + 50 * rho_c)
