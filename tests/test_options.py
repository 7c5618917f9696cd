"""Tests for the reinforcement option generator."""
import math

import pytest

from nzbeam.codes import NZS3101
from nzbeam.core import OptionGenerator, generate_options
from nzbeam.core.options import WARNING_BELOW_MIN_STEEL, required_steel_area
from nzbeam.models.inputs import BeamGeometry, DesignForces
from nzbeam.utils import section
from nzbeam.utils.constants import MAIN_BAR_SIZES, MAX_UTILIZATION, STIRRUP_BAR_SIZES


class TestRequiredSteelArea:

    def test_quadratic_root(self):
        """300 x 500, d = 442, M* = 150 kNm."""
        As = required_steel_area(150, 0.85, 300, 442, 30, 500, 0.85)
        assert As == pytest.approx(852, abs=2)

    def test_root_satisfies_equilibrium(self):
        As = required_steel_area(150, 0.85, 300, 442, 30, 500, 0.85)
        a = As * 500 / (0.85 * 30 * 300)
        assert As * 500 * (442 - a / 2) == pytest.approx(150e6 / 0.85)

    def test_infeasible_moment(self):
        assert required_steel_area(5000, 0.85, 300, 442, 30, 500, 0.85) is None

    def test_zero_moment_needs_no_steel(self):
        assert required_steel_area(0, 0.85, 300, 442, 30, 500, 0.85) == 0.0


class TestGenerateOptions:

    @pytest.fixture
    def options(self, forces, geometry, materials):
        return generate_options(forces, geometry, materials)

    def test_non_empty(self, options):
        assert options
        assert options[0].db in (16, 20)

    def test_utilizations_within_limit(self, options):
        for opt in options:
            assert 0 < opt.m_util <= MAX_UTILIZATION
            assert 0 < opt.v_util <= MAX_UTILIZATION

    def test_area_provided_matches_bar_count(self, options):
        for opt in options:
            assert opt.as_provided == pytest.approx(opt.n * section.bar_area(opt.db))

    def test_bar_count_is_minimal(self, forces, geometry, materials, options):
        beta1 = NZS3101().get_beta1(materials.concrete_fc)
        for opt in options:
            d = section.effective_depth(geometry.depth, geometry.cover, opt.ds, opt.db)
            As_req = required_steel_area(
                forces.moment, forces.phi_b, geometry.breadth, d,
                materials.concrete_fc, materials.main_bar_fy, beta1,
            )
            assert opt.as_provided >= As_req
            assert (opt.n - 1) * section.bar_area(opt.db) < As_req

    def test_sorted_by_combined_utilization(self, options):
        totals = [o.m_util + o.v_util for o in options]
        assert totals == sorted(totals)

    def test_at_most_one_option_per_bar_pair(self, options):
        pairs = [(o.db, o.ds) for o in options]
        assert len(pairs) == len(set(pairs))
        assert len(options) <= len(MAIN_BAR_SIZES) * len(STIRRUP_BAR_SIZES)

    def test_key_format(self, options):
        opt = options[0]
        assert opt.key == f"{opt.db}-{opt.n}-{opt.ds}-{opt.legs}-{opt.ss}"

    def test_deterministic(self, forces, geometry, materials, options):
        again = OptionGenerator().generate(forces, geometry, materials)
        assert again == options

    def test_more_moment_needs_no_fewer_bars(self, geometry, materials):
        low = generate_options(DesignForces(moment=100, shear=50), geometry, materials)
        high = generate_options(DesignForces(moment=150, shear=50), geometry, materials)
        low_n = {(o.db, o.ds): o.n for o in low}
        shared = [o for o in high if (o.db, o.ds) in low_n]
        assert shared
        for opt in shared:
            assert opt.n >= low_n[(opt.db, opt.ds)]

    def test_infeasible_moment_gives_empty_list(self, geometry, materials):
        assert generate_options(DesignForces(moment=5000, shear=50), geometry, materials) == []

    def test_infeasible_shear_gives_empty_list(self, geometry, materials):
        assert generate_options(DesignForces(moment=150, shear=5000), geometry, materials) == []

    def test_small_shear_takes_first_stirrup_layout(self, geometry, materials):
        """Fewest legs and widest spacing win when any layout works."""
        options = generate_options(DesignForces(moment=150, shear=1), geometry, materials)
        assert options
        for opt in options:
            assert opt.legs == 2
            assert opt.ss == 300

    def test_extra_legs_only_when_two_legs_fail(self, geometry, materials):
        """More legs are used only when 2 legs at the closest spacing fail."""
        options = generate_options(DesignForces(moment=150, shear=600), geometry, materials)
        assert any(o.legs > 2 for o in options)
        for opt in options:
            if opt.legs > 2:
                d = section.effective_depth(geometry.depth, geometry.cover, opt.ds, opt.db)
                Vs_two_legs = section.stirrup_area(opt.ds, 2) * materials.stirrup_fys * d / 50
                rho = opt.as_provided / (geometry.breadth * d)
                Vc = NZS3101().get_concrete_shear_stress(
                    materials.concrete_fc, materials.main_bar_fy, rho, d
                ) * geometry.breadth * d
                assert 600e3 / (0.75 * (Vs_two_legs + Vc)) > MAX_UTILIZATION

    def test_light_moment_warns_below_minimum_steel(self, geometry, materials):
        options = generate_options(DesignForces(moment=5, shear=20), geometry, materials)
        smallest = [o for o in options if o.db == 12]
        assert smallest
        assert all(WARNING_BELOW_MIN_STEEL in o.warnings for o in smallest)

    def test_pairs_without_effective_depth_are_skipped(self, materials):
        shallow = BeamGeometry(breadth=300, depth=60, cover=40)
        options = generate_options(DesignForces(moment=0.5, shear=1), shallow, materials)
        for opt in options:
            assert section.effective_depth(60, 40, opt.ds, opt.db) > 0
        assert all(not (o.db == 25 and o.ds == 12) for o in options)

    def test_utilization_matches_capacity(self, forces, geometry, materials, options):
        opt = options[0]
        d = section.effective_depth(geometry.depth, geometry.cover, opt.ds, opt.db)
        a = opt.as_provided * 500 / (0.85 * 30 * 300)
        Mn = opt.as_provided * 500 * (d - a / 2)
        assert opt.m_util == pytest.approx(150e6 / (0.85 * Mn))
        assert not math.isnan(opt.v_util)

    def test_zero_moment_gives_empty_list(self, geometry, materials):
        """With no moment there is no flexural steel to size, even if stirrups carry V*."""
        assert generate_options(DesignForces(moment=0, shear=20), geometry, materials) == []
