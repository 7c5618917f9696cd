"""
Serviceability checks for rectangular beams per NZS 3101.

Implements:
- Steel stress at ULS and SLS moments (elastic / yielded curvature solve)
- Shrinkage-induced steel stress
- Crack width (Clause 2.4.4)
- Effective moment of inertia and long-term factor Kcs (Clause 6.8.3)

Units throughout: N, mm, MPa. Moments enter the solver in N.mm.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Union

from loguru import logger

from nzbeam.codes.base_code import DesignCode
from nzbeam.codes.nzs3101 import NZS3101
from nzbeam.models.inputs import (
    BeamGeometry, DesignForces, FinalReinforcement, MaterialProperties, SLSDesignInputs,
)
from nzbeam.models.outputs import CheckResult, CheckStatus, SLSCheckError
from nzbeam.utils import section
from nzbeam.utils.constants import KCS_TOP_BAR_COUNT, KCS_TOP_BAR_DIAMETER

ELASTIC = "elastic"
YIELDED = "yielded"


@dataclass(frozen=True)
class CurvatureSolution:
    """Successful curvature/stress solve."""
    branch: str       # 'elastic' or 'yielded'
    c: float          # Neutral axis depth (mm)
    fs: float         # Steel stress (MPa)
    phi_c: float      # Curvature (1/mm)
    C: float          # Concrete compression (N)
    T: float          # Steel tension (N)
    Mc: float         # Moment of the compression block about the neutral axis (N.mm)
    Ms: float         # Moment of the steel force about the neutral axis (N.mm)
    Mn: float         # Mc + Ms (N.mm)
    elastic_c: float  # Neutral axis depth of the elastic trial (mm)
    elastic_fs: float  # Steel stress of the elastic trial (MPa)
    discriminant: float
    mn_ge_required: bool  # Mn ≥ M/φb
    ok: bool = True

    @property
    def yielded(self) -> bool:
        return self.branch == YIELDED


@dataclass(frozen=True)
class CurvatureSolveFailure:
    """The section cannot be solved for the given moment."""
    reason: str
    ok: bool = False


SolveResult = Union[CurvatureSolution, CurvatureSolveFailure]


def solve_curvature_with_yield_check(
    M: float,      # Moment (N.mm)
    phi_b: float,
    fc: float,     # f'c (MPa)
    beta1: float,
    B: float,      # Breadth (mm)
    d: float,      # Effective depth (mm)
    As: float,     # Tension steel (mm²)
    Es: float,     # Steel modulus (MPa)
    fy: float,     # Steel yield (MPa)
) -> SolveResult:
    """
    Solve neutral axis depth, steel stress and curvature under moment M.

    Elastic trial: the compression block must balance M/φb, giving
        c = (d - √(d² - 2(M/φb)/(0.85 f'c B))) / β1
    and steel stress fs = C / As. If fs exceeds fy the steel stress is
    pinned at fy and c recomputed from T = As·fy.

    Never raises for an infeasible section; returns CurvatureSolveFailure
    with the reason instead. Callers must branch on ``.ok``.
    """
    if As <= 0:
        return CurvatureSolveFailure("As must be > 0")
    if B <= 0 or d <= 0:
        return CurvatureSolveFailure("B and d must be > 0")
    if Es <= 0 or fy <= 0 or fc <= 0:
        return CurvatureSolveFailure("Material properties must be positive")

    M_required = M / phi_b
    denom = 0.85 * fc * B
    term = d * d - 2 * M_required / denom
    if term < 0:
        return CurvatureSolveFailure("Demand exceeds concrete block limit (negative discriminant).")

    c_el = (d - math.sqrt(term)) / beta1
    if not 0 < c_el < d:
        return CurvatureSolveFailure("Computed neutral axis depth (elastic) not physical.")

    C_el = 0.85 * fc * beta1 * c_el * B
    fs_el = C_el / As

    if fs_el <= fy:
        Mc = C_el * (c_el - beta1 * c_el / 2)
        Ms = As * fs_el * (d - c_el)
        Mn = Mc + Ms
        return CurvatureSolution(
            branch=ELASTIC,
            c=c_el,
            fs=fs_el,
            phi_c=fs_el / (Es * (d - c_el)),
            C=C_el,
            T=As * fs_el,
            Mc=Mc,
            Ms=Ms,
            Mn=Mn,
            elastic_c=c_el,
            elastic_fs=fs_el,
            discriminant=term,
            mn_ge_required=Mn + 1e-9 >= M_required,
        )

    # Steel past yield: fs = fy and the block balances As·fy
    T_y = As * fy
    c_y = T_y / (0.85 * fc * beta1 * B)
    if not 0 < c_y < d:
        return CurvatureSolveFailure(f"Yielded neutral axis depth invalid (c={c_y:.2f} mm).")

    C_y = 0.85 * fc * beta1 * c_y * B
    Mc_y = C_y * (c_y - beta1 * c_y / 2)
    Ms_y = T_y * (d - c_y)
    Mn_y = Mc_y + Ms_y
    return CurvatureSolution(
        branch=YIELDED,
        c=c_y,
        fs=fy,
        phi_c=fy / (Es * (d - c_y)),  # least curvature to reach fy
        C=C_y,
        T=T_y,
        Mc=Mc_y,
        Ms=Ms_y,
        Mn=Mn_y,
        elastic_c=c_el,
        elastic_fs=fs_el,
        discriminant=term,
        mn_ge_required=Mn_y + 1e-9 >= M_required,
    )


def cracked_neutral_axis(B: float, d: float, As: float, n_ratio: float) -> float:
    """Positive root of B·x²/2 = n·As·(d - x)."""
    a = B / 2
    b = n_ratio * As
    c = -n_ratio * As * d
    return (-b + math.sqrt(b * b - 4 * a * c)) / (2 * a)


class ServiceabilityChecker:
    """
    Serviceability checks for a chosen reinforcement layout.

    - Steel stress at ULS moment (fails if the steel has yielded)
    - Steel stress at SLS moment
    - Crack width including half the shrinkage stress
    - Effective inertia Ie and long-term factor Kcs
    """

    def __init__(self, code: DesignCode = None):
        self.code = code or NZS3101()

    def steel_stress(
        self,
        M_Nmm: float,
        geometry: BeamGeometry,
        materials: MaterialProperties,
        reinforcement: FinalReinforcement,
    ) -> SolveResult:
        """Actual steel stress under a moment: φb is taken as 1.0."""
        fc = materials.concrete_fc
        db, ds = reinforcement.db, reinforcement.ds
        return solve_curvature_with_yield_check(
            M=M_Nmm,
            phi_b=1.0,
            fc=fc,
            beta1=self.code.get_beta1(fc),
            B=geometry.breadth,
            d=section.effective_depth(geometry.depth, geometry.cover, ds, db),
            As=reinforcement.n * section.bar_area(db),
            Es=materials.main_bar_es,
            fy=materials.main_bar_fy,
        )

    def shrinkage_stress(
        self,
        geometry: BeamGeometry,
        materials: MaterialProperties,
        reinforcement: FinalReinforcement,
        shrinkage_strain: float,
    ) -> float:
        """
        Half of the restrained shrinkage steel stress (MPa).

        fsc = Es εsh / (1 + n ρ), with ρ = As / (B D) and n = Es / Ec
        """
        As = reinforcement.n * section.bar_area(reinforcement.db)
        rho = As / (geometry.breadth * geometry.depth)
        n_ratio = materials.main_bar_es / materials.concrete_ec
        fsc_full = materials.main_bar_es * shrinkage_strain / (1 + n_ratio * rho)
        return 0.5 * fsc_full

    def crack_width(
        self,
        fs: float,
        fsc_half: float,
        geometry: BeamGeometry,
        materials: MaterialProperties,
        reinforcement: FinalReinforcement,
    ) -> float:
        """
        Crack width w = 2 gs (fs + fsc/2) / Es (mm).

        gs is the distance from the point of interest to the nearest bar
        surface, midway between bars on the tension face.
        """
        n, db, ds = reinforcement.n, reinforcement.db, reinforcement.ds
        cover = geometry.cover
        s = section.bar_spacing(geometry.breadth, cover, ds, db, n)
        fs_eff = fs + fsc_half
        gs = math.sqrt((s / 2) ** 2 + (cover + ds + db / 2) ** 2) - db / 2
        return 2 * gs * (fs_eff / materials.main_bar_es)

    def check(
        self,
        forces: DesignForces,
        geometry: BeamGeometry,
        materials: MaterialProperties,
        reinforcement: Optional[FinalReinforcement],
        sls_inputs: SLSDesignInputs = None,
    ) -> Union[List[CheckResult], SLSCheckError]:
        """
        Run the serviceability checks.

        Returns:
            Ordered list of check results, or SLSCheckError when either
            stress solve is infeasible or no reinforcement is set.
        """
        if reinforcement is None:
            return SLSCheckError(error="Designed reinforcement not set.")
        sls_inputs = sls_inputs or SLSDesignInputs()

        B = geometry.breadth
        D = geometry.depth
        fc = materials.concrete_fc
        fy = materials.main_bar_fy
        Es = materials.main_bar_es
        n, db, ds = reinforcement.n, reinforcement.db, reinforcement.ds

        uls = self.steel_stress(forces.moment * 1e6, geometry, materials, reinforcement)
        if not uls.ok:
            logger.warning("ULS stress solve failed: {}", uls.reason)
            return SLSCheckError(error=uls.reason or "ULS stress calculation failed.")
        Ms_Nmm = sls_inputs.service_moment * 1e6
        sls = self.steel_stress(Ms_Nmm, geometry, materials, reinforcement)
        if not sls.ok:
            logger.warning("SLS stress solve failed: {}", sls.reason)
            return SLSCheckError(error=sls.reason or "SLS stress calculation failed.")

        results = []

        # Stresses
        results.append(CheckResult(
            check_name="ULS Steel Stress, fsu",
            value=f"{uls.fs:.1f} MPa",
            limit=f"fy = {fy:.0f} MPa",
            status=CheckStatus.FAIL if uls.yielded else CheckStatus.PASS,
            notes=uls.branch,
        ))
        results.append(CheckResult(
            check_name="SLS Steel Stress, fss",
            value=f"{sls.fs:.1f} MPa",
            status=CheckStatus.INFO,
        ))

        # Crack width
        fsc_half = self.shrinkage_stress(geometry, materials, reinforcement, sls_inputs.shrinkage_strain)
        results.append(CheckResult(
            check_name="Shrinkage Stress, fsc",
            value=f"{fsc_half:.1f} MPa",
            status=CheckStatus.INFO,
        ))

        w = self.crack_width(sls.fs, fsc_half, geometry, materials, reinforcement)
        w_limit = sls_inputs.crack_width_limit
        results.append(CheckResult(
            check_name="SLS Crack Width, w_sls",
            value=f"{w:.3f} mm",
            limit=f"≤ {w_limit:.2f} mm",
            status=CheckStatus.PASS if w <= w_limit else CheckStatus.FAIL,
        ))

        # Stiffness
        n_ratio = Es / materials.concrete_ec
        As = n * section.bar_area(db)
        d = section.effective_depth(D, geometry.cover, ds, db)
        x = cracked_neutral_axis(B, d, As, n_ratio)
        Ig = B * D ** 3 / 12
        Icr = B * x ** 3 / 3 + n_ratio * As * (d - x) ** 2
        Mcr = self.code.get_modulus_of_rupture(fc) * Ig / (D / 2)

        if Ms_Nmm <= Mcr:
            Ie = Ig
            state = "uncracked"
        else:
            ratio = (Mcr / Ms_Nmm) ** 3
            Ie = ratio * Ig + (1 - ratio) * Icr
            state = "cracked"

        results.append(CheckResult(
            check_name="Effective Inertia, Ie",
            value=f"{Ie / 1e6:.1f} ×10⁶ mm⁴",
            status=CheckStatus.INFO,
            notes=(
                f"{state}: Ig = {Ig / 1e6:.1f} ×10⁶ mm⁴, Icr = {Icr / 1e6:.1f} ×10⁶ mm⁴, "
                f"Mcr = {Mcr / 1e6:.1f} kNm"
            ),
        ))
        results.append(CheckResult(
            check_name="Stiffness Ratio, Ie/Ig",
            value=f"{Ie / Ig:.3f}",
            status=CheckStatus.INFO,
        ))

        # Top steel assumed as 2 x 12 mm bars
        Asc = KCS_TOP_BAR_COUNT * section.bar_area(KCS_TOP_BAR_DIAMETER)
        rho_c = Asc / (B * d)
        Kcs = self.code.get_long_term_factor(rho_c)
        results.append(CheckResult(
            check_name="Long-term Factor, Kcs",
            value=f"{Kcs:.2f}",
            status=CheckStatus.INFO,
            notes="For sustained loads, assumes 2 x 12 mm top bars",
        ))

        logger.info(
            "SLS check of {}-D{}: fs,uls={:.1f} MPa ({}), w={:.3f} mm",
            n, db, uls.fs, uls.branch, w,
        )
        return results


def run_sls_check(
    forces: DesignForces,
    geometry: BeamGeometry,
    materials: MaterialProperties,
    reinforcement: Optional[FinalReinforcement],
    sls_inputs: SLSDesignInputs = None,
    code: DesignCode = None,
) -> Union[List[CheckResult], SLSCheckError]:
    """Run the serviceability checks. See ServiceabilityChecker.check."""
    return ServiceabilityChecker(code).check(forces, geometry, materials, reinforcement, sls_inputs)
