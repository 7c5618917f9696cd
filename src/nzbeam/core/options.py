"""
Reinforcement option generator for rectangular beams per NZS 3101.

Searches a fixed grid of main bar and stirrup sizes and returns every
combination that carries the design moment and shear at no more than
95% utilization, most efficient first.

Search per (db, ds) pair:
1. Effective depth d = D - cover - ds - db/2
2. Required As from the rectangular stress block quadratic
3. Bar count rounded up, minimum steel and single-layer warnings
4. Moment utilization from the provided steel
5. Fewest stirrup legs, then widest spacing, that carries V*
"""

import math
from typing import List, Optional, Tuple

from loguru import logger

from nzbeam.codes.base_code import DesignCode
from nzbeam.codes.nzs3101 import NZS3101
from nzbeam.models.inputs import BeamGeometry, DesignForces, MaterialProperties
from nzbeam.models.outputs import DesignOption
from nzbeam.utils import section
from nzbeam.utils.constants import (
    MAIN_BAR_SIZES, MAX_UTILIZATION, STIRRUP_BAR_SIZES, STIRRUP_LEGS, STIRRUP_SPACINGS,
)

WARNING_BELOW_MIN_STEEL = "As < As,min"
WARNING_MULTIPLE_LAYERS = "Needs multiple layers"


def required_steel_area(
    moment: float,   # M* (kNm)
    phi_b: float,
    breadth: float,  # B (mm)
    d: float,        # Effective depth (mm)
    fc: float,       # f'c (MPa)
    fy: float,       # fy (MPa)
    beta1: float,
) -> Optional[float]:
    """
    Required tension steel area from rectangular stress block equilibrium.

    Solves a·As² + b·As + c = 0 with
        a = fy² / (2·β1·f'c·B),  b = -fy·d,  c = M*/φb

    Returns the smaller positive root in mm², or None when the section
    cannot develop the moment (negative discriminant or no positive root).
    Zero moment needs no steel.
    """
    if moment <= 0:
        return 0.0

    a = fy ** 2 / (2 * beta1 * fc * breadth)
    b = -fy * d
    c = moment * 1e6 / phi_b

    discriminant = b * b - 4 * a * c
    if discriminant < 0:
        return None

    root1 = (-b - math.sqrt(discriminant)) / (2 * a)
    root2 = (-b + math.sqrt(discriminant)) / (2 * a)
    positive = [r for r in (root1, root2) if r > 0]
    if not positive:
        return None
    return min(positive)


class OptionGenerator:
    """
    Combinatorial reinforcement search.

    Stateless: the same inputs always give the same ordered list.
    """

    def __init__(self, code: DesignCode = None):
        self.code = code or NZS3101()

    def generate(
        self,
        forces: DesignForces,
        geometry: BeamGeometry,
        materials: MaterialProperties,
    ) -> List[DesignOption]:
        """
        Generate feasible design options.

        Args:
            forces: Design moment and shear with reduction factors
            geometry: Section breadth, depth and cover
            materials: f'c, fy and fys

        Returns:
            Options sorted by M-utilization + V-utilization, ascending.
            An empty list means nothing in the search grid works.
        """
        fc = materials.concrete_fc
        fy = materials.main_bar_fy
        beta1 = self.code.get_beta1(fc)

        options = []
        for db in MAIN_BAR_SIZES:
            for ds in STIRRUP_BAR_SIZES:
                option = self._evaluate_pair(db, ds, beta1, forces, geometry, materials)
                if option is not None:
                    options.append(option)

        options.sort(key=lambda o: o.m_util + o.v_util)
        logger.info(
            "Generated {} design options for M*={} kNm, V*={} kN on {}x{} mm",
            len(options), forces.moment, forces.shear, geometry.breadth, geometry.depth,
        )
        return options

    def _evaluate_pair(
        self,
        db: float,
        ds: float,
        beta1: float,
        forces: DesignForces,
        geometry: BeamGeometry,
        materials: MaterialProperties,
    ) -> Optional[DesignOption]:
        """Size the main bars and stirrups for one (db, ds) pair."""
        B = geometry.breadth
        fc = materials.concrete_fc
        fy = materials.main_bar_fy

        d = section.effective_depth(geometry.depth, geometry.cover, ds, db)
        if d <= 0:
            logger.debug("db={} ds={}: no effective depth (d={:.1f})", db, ds, d)
            return None

        as_required = required_steel_area(forces.moment, forces.phi_b, B, d, fc, fy, beta1)
        if as_required is None:
            logger.debug("db={} ds={}: moment exceeds section capacity", db, ds)
            return None
        if as_required == 0:
            logger.debug("db={} ds={}: no moment demand", db, ds)
            return None

        n = math.ceil(as_required / section.bar_area(db))
        as_provided = n * section.bar_area(db)

        warnings = []
        if as_provided < section.minimum_flexural_steel(fc, fy, B, d):
            warnings.append(WARNING_BELOW_MIN_STEEL)
        if not section.bars_fit_in_single_layer(B, geometry.cover, ds, db, n):
            warnings.append(WARNING_MULTIPLE_LAYERS)

        # Nominal moment capacity with the provided steel
        a = as_provided * fy / (beta1 * fc * B)
        Mn = as_provided * fy * (d - a / 2)  # N.mm
        if Mn <= 0:
            logger.debug("db={} ds={}: stress block deeper than the section", db, ds)
            return None
        m_util = forces.moment * 1e6 / (forces.phi_b * Mn)
        if m_util > MAX_UTILIZATION:
            logger.debug("db={} ds={}: M utilization {:.3f} too high", db, ds, m_util)
            return None

        rho = as_provided / (B * d)
        Vc = self.code.get_concrete_shear_stress(fc, fy, rho, d) * B * d  # N

        stirrups = self._select_stirrups(ds, d, Vc, forces, materials)
        if stirrups is None:
            logger.debug("db={} ds={}: no stirrup layout carries V*", db, ds)
            return None
        legs, ss, v_util = stirrups

        return DesignOption(
            key=f"{db}-{n}-{ds}-{legs}-{ss}",
            db=db,
            n=n,
            as_provided=as_provided,
            ds=ds,
            legs=legs,
            ss=ss,
            m_util=m_util,
            v_util=v_util,
            warnings=warnings,
        )

    def _select_stirrups(
        self,
        ds: float,
        d: float,
        Vc: float,
        forces: DesignForces,
        materials: MaterialProperties,
    ) -> Optional[Tuple[int, float, float]]:
        """
        First (legs, spacing) that keeps V-utilization within the limit.

        Fewest legs wins; within a leg count the widest spacing wins.
        """
        V = forces.shear * 1e3  # N
        for legs in STIRRUP_LEGS:
            Av = section.stirrup_area(ds, legs)
            for ss in STIRRUP_SPACINGS:
                Vs = Av * materials.stirrup_fys * d / ss
                v_util = V / (forces.phi_s * (Vs + Vc))
                if v_util <= MAX_UTILIZATION:
                    return legs, ss, v_util
        return None


def generate_options(
    forces: DesignForces,
    geometry: BeamGeometry,
    materials: MaterialProperties,
    code: DesignCode = None,
) -> List[DesignOption]:
    """Generate ranked reinforcement options. See OptionGenerator.generate."""
    return OptionGenerator(code).generate(forces, geometry, materials)
