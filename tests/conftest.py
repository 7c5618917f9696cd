"""Shared fixtures for the beam design tests."""
import pytest

from nzbeam.input_parser import default_record
from nzbeam.models.inputs import (
    BeamGeometry, DesignForces, MaterialProperties,
)


@pytest.fixture
def forces():
    """M* = 150 kNm, V* = 50 kN with default reduction factors."""
    return DesignForces(moment=150, shear=50, phi_b=0.85, phi_s=0.75)


@pytest.fixture
def geometry():
    """300 x 500 mm section with 40 mm cover."""
    return BeamGeometry(breadth=300, depth=500, cover=40)


@pytest.fixture
def materials():
    """C30 concrete, 500E main bars, 300E stirrups."""
    return MaterialProperties(concrete_fc=30, concrete_ec=25084, main_bar_fy=500, main_bar_es=200000)


@pytest.fixture
def record():
    """Record built from the sample template (200 x 400, 2-HD16, R10 @ 200)."""
    return default_record()


@pytest.fixture
def reinforcement(record):
    return record.final_reinforcement


@pytest.fixture
def masonry_materials():
    return MaterialProperties(
        section_material_type="masonry",
        concrete_grade_name="Observation Type A",
        concrete_fc=12,
        concrete_ec=10200,
    )

