"""
Detailed code checks for a chosen reinforcement layout per NZS 3101 / NZS 4230.

Checks, in report order:
1. Effective depth, steel area and ratio (information)
2. Minimum tension reinforcement
3. Ductility: neutral axis depth ≤ 0.75 × balanced depth
4. Moment capacity
5. Shear capacity (concrete or masonry)
6. Minimum shear reinforcement and stirrup spacing limits
"""

import math
from typing import List, Optional

from loguru import logger

from nzbeam.codes.base_code import DesignCode
from nzbeam.codes.nzs3101 import NZS3101
from nzbeam.materials import MaterialGradeTable, load_material_table
from nzbeam.models.inputs import (
    BeamGeometry, DesignCheckInputs, DesignForces, FinalReinforcement, MaterialProperties,
)
from nzbeam.models.outputs import CheckResult, CheckStatus
from nzbeam.utils import section


def _status(ok: bool) -> CheckStatus:
    return CheckStatus.PASS if ok else CheckStatus.FAIL


class DetailedChecker:
    """
    Clause-by-clause check of one fixed reinforcement layout.

    The material table supplies the ultimate strains used by the ductility
    check; the packaged table is used when none is given.
    """

    def __init__(self, code: DesignCode = None, material_table: MaterialGradeTable = None):
        self.code = code or NZS3101()
        self.material_table = material_table or load_material_table()

    def check(
        self,
        forces: DesignForces,
        geometry: BeamGeometry,
        materials: MaterialProperties,
        reinforcement: Optional[FinalReinforcement],
        check_inputs: DesignCheckInputs = None,
    ) -> List[CheckResult]:
        """
        Run every applicable check.

        Args:
            forces: M*, V*, φb, φs
            geometry: Section dimensions and cover
            materials: Section and reinforcement materials
            reinforcement: Chosen layout; None gives an empty report
            check_inputs: Masonry vm and the minimum stirrup waiver

        Returns:
            Ordered list of check results
        """
        if reinforcement is None:
            logger.warning("Detailed check requested without a final reinforcement")
            return []
        check_inputs = check_inputs or DesignCheckInputs()
        table = self.material_table

        M = forces.moment  # kNm
        B = geometry.breadth
        fc = materials.concrete_fc
        fy = materials.main_bar_fy
        fys = materials.stirrup_fys
        n, db, ds, ss, legs = (
            reinforcement.n, reinforcement.db, reinforcement.ds,
            reinforcement.ss, reinforcement.legs,
        )

        results = []

        # 1. Basic properties
        d = section.effective_depth(geometry.depth, geometry.cover, ds, db)
        if d <= 0:
            logger.warning("Detailed check: no effective depth (d={:.1f} mm)", d)
            return [CheckResult(
                check_name="Effective Depth, d",
                value=f"{d:.1f} mm",
                limit="> 0 mm",
                status=CheckStatus.FAIL,
                notes="Cover, stirrup and bar size leave no effective depth; no further checks run.",
            )]
        As = n * section.bar_area(db)
        rho = As / (B * d)
        results.append(CheckResult(
            check_name="Effective Depth, d", value=f"{d:.1f} mm", status=CheckStatus.INFO,
        ))
        results.append(CheckResult(
            check_name="Reinforcement Area, As", value=f"{As:.1f} mm²", status=CheckStatus.INFO,
        ))
        results.append(CheckResult(
            check_name="Reinforcement Ratio, ρ", value=f"{rho * 100:.3f} %", status=CheckStatus.INFO,
        ))

        # 2. Minimum reinforcement
        As_min = self.code.get_minimum_flexural_steel(fc, fy, B, d)
        results.append(CheckResult(
            check_name="Minimum Reinforcement, As_min",
            value=f"{As:.1f} mm²",
            limit=f"≥ {As_min:.1f} mm²",
            status=_status(As >= As_min),
        ))

        # 3. Ductility
        beta1 = self.code.get_beta1(fc)
        a = As * fy / (0.85 * fc * B)
        c = a / beta1
        eps_cu = table.strain(materials.section_material_type)
        eps_s = table.strain("rebar")
        c_limit = self.code.get_neutral_axis_limit(d, eps_cu, eps_s)
        results.append(CheckResult(
            check_name="Ductility (Neutral Axis Depth), c",
            value=f"{c:.1f} mm",
            limit=f"≤ {c_limit:.1f} mm",
            status=_status(c <= c_limit),
        ))

        # 4. Moment capacity
        jd = d - a / 2
        Mn = As * fy * jd  # N.mm
        phi_Mn = forces.phi_b * Mn / 1e6  # kNm
        results.append(CheckResult(
            check_name="Moment Capacity",
            value=f"M* = {M:.1f} kNm",
            limit=f"≤ φMn = {phi_Mn:.1f} kNm",
            status=_status(M <= phi_Mn),
        ))

        # 5. Shear capacity
        V = forces.shear * 1e3  # N
        if materials.is_masonry:
            Vc = check_inputs.masonry_shear_strength_vm * B * d
        else:
            Vc = self.code.get_concrete_shear_stress(fc, fy, rho, d) * B * d
        Av = section.stirrup_area(ds, legs)
        Vs = Av * fys * d / ss
        phi_Vn = forces.phi_s * (Vs + Vc)
        results.append(CheckResult(
            check_name="Shear Capacity",
            value=f"V* = {forces.shear:.1f} kN",
            limit=f"≤ φVn = {phi_Vn / 1000:.1f} kN",
            status=_status(V <= phi_Vn),
            notes=f"Vc: {Vc / 1000:.1f} kN, Vs: {Vs / 1000:.1f} kN",
        ))

        # 6. Shear reinforcement limits
        results.extend(self._shear_reinforcement_limits(
            V, Vc, Vs, Av, d, forces, geometry, materials, reinforcement, check_inputs
        ))

        failed = sum(1 for r in results if r.status == CheckStatus.FAIL)
        logger.info("Detailed check of {}-D{}: {} checks, {} failing", n, db, len(results), failed)
        return results

    def _shear_reinforcement_limits(
        self,
        V: float,   # N
        Vc: float,  # N
        Vs: float,  # N
        Av: float,  # mm²
        d: float,
        forces: DesignForces,
        geometry: BeamGeometry,
        materials: MaterialProperties,
        reinforcement: FinalReinforcement,
        check_inputs: DesignCheckInputs,
    ) -> List[CheckResult]:
        """Minimum stirrup area and spacing checks (Clause 9.3.9.4)."""
        B = geometry.breadth
        fc = materials.concrete_fc
        ss = reinforcement.ss

        if V <= 0.5 * forces.phi_s * Vc:
            return [CheckResult(
                check_name="Shear Reinforcement Minima", value="-", status=CheckStatus.PASS,
                notes="V* ≤ 0.5φVc, minimum stirrups not required by strength.",
            )]
        if check_inputs.min_shear_reinforcement_waived:
            return [CheckResult(
                check_name="Shear Reinforcement Minima", value="-", status=CheckStatus.PASS,
                notes="User has waived minimum shear reinforcement checks per NZS 3101.",
            )]

        results = []

        av_rate = Av / ss
        av_rate_min = self.code.get_minimum_stirrup_rate(fc, B, materials.stirrup_fys)
        results.append(CheckResult(
            check_name="Min. Stirrup Area, Av_min",
            value=f"{av_rate:.2f} mm²/mm",
            limit=f"≥ {av_rate_min:.2f} mm²/mm",
            status=_status(av_rate >= av_rate_min),
        ))

        s_legs = section.stirrup_leg_spacing(B, geometry.cover, reinforcement.ds, reinforcement.legs)
        wide_web = B > 0.5 * d
        high_shear = (
            Vs > self.code.high_shear_threshold(fc, B, d)
            and not (wide_web and s_legs >= 200)
        )
        max_ss, reason = self.code.get_maximum_stirrup_spacing(d, high_shear)
        results.append(CheckResult(
            check_name="Max. Stirrup Spacing, s",
            value=f"{ss:g} mm",
            limit=f"≤ {max_ss:.0f} mm ({reason})",
            status=_status(ss <= max_ss),
        ))

        # A single leg has no leg spacing to check
        if wide_web and not math.isinf(s_legs):
            max_s_legs = self.code.get_maximum_leg_spacing(d)
            results.append(CheckResult(
                check_name="Max. Leg Spacing, s_leg",
                value=f"{s_legs:.0f} mm",
                limit=f"≤ {max_s_legs:.0f} mm",
                status=_status(s_legs <= max_s_legs),
            ))

        return results


def run_detailed_check(
    forces: DesignForces,
    geometry: BeamGeometry,
    materials: MaterialProperties,
    reinforcement: Optional[FinalReinforcement],
    check_inputs: DesignCheckInputs = None,
    code: DesignCode = None,
    material_table: MaterialGradeTable = None,
) -> List[CheckResult]:
    """Run the detailed checks. See DetailedChecker.check."""
    return DetailedChecker(code, material_table).check(
        forces, geometry, materials, reinforcement, check_inputs
    )
