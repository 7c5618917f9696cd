"""
Input data models for rectangular beam design using Pydantic for validation.
Follows NZS 3101 (concrete) / NZS 4230 (masonry) conventions.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class SectionMaterialType(str, Enum):
    """Material of the beam section itself."""
    CONCRETE = "concrete"
    MASONRY = "masonry"


class DesignForces(BaseModel):
    """Factored design actions and strength reduction factors."""
    model_config = ConfigDict(frozen=True)

    moment: float = Field(..., ge=0, description="Design moment M* in kNm")
    shear: float = Field(..., ge=0, description="Design shear V* in kN")
    phi_b: float = Field(default=0.85, gt=0, le=1, description="Strength reduction factor for bending")
    phi_s: float = Field(default=0.75, gt=0, le=1, description="Strength reduction factor for shear")
    # Axial load is carried through but not used by any capacity formula
    axial_load: float = Field(default=0.0, description="Design axial load N* in kN")
    phi_o: float = Field(default=0.85, gt=0, le=1, description="Strength reduction factor for axial load")


class BeamGeometry(BaseModel):
    """Rectangular section geometry."""
    model_config = ConfigDict(frozen=True)

    breadth: float = Field(..., gt=0, description="Section breadth B in mm")
    depth: float = Field(..., gt=0, description="Overall depth D in mm")
    cover: float = Field(..., gt=0, description="Cover to the stirrups in mm")
    span: float = Field(default=5.0, gt=0, description="Span in meters")

    @model_validator(mode="after")
    def _cover_within_depth(self) -> "BeamGeometry":
        if self.cover >= self.depth:
            raise ValueError(
                f"cover ({self.cover} mm) must be less than depth ({self.depth} mm)"
            )
        return self


class MaterialProperties(BaseModel):
    """Section and reinforcement materials.

    For masonry sections the ``concrete_*`` fields carry f'm and Em.
    """
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    section_material_type: SectionMaterialType = SectionMaterialType.CONCRETE
    concrete_grade_name: str = "C30"
    concrete_fc: float = Field(default=30.0, gt=0, description="f'c (or f'm) in MPa")
    concrete_ec: float = Field(default=25084.0, gt=0, description="Ec (or Em) in MPa")
    main_bar_grade_name: str = "500E"
    main_bar_fy: float = Field(default=500.0, gt=0, description="fy in MPa")
    main_bar_es: float = Field(default=200000.0, gt=0, description="Es in MPa")
    stirrup_grade_name: str = "300E"
    stirrup_fys: float = Field(default=300.0, gt=0, description="fys in MPa")
    stirrup_es: float = Field(default=200000.0, gt=0, description="Es of stirrups in MPa")

    @property
    def is_masonry(self) -> bool:
        return self.section_material_type == SectionMaterialType.MASONRY.value


class FinalReinforcement(BaseModel):
    """The reinforcement layout chosen for detailed and SLS checks."""
    model_config = ConfigDict(frozen=True)

    n: int = Field(..., ge=1, description="Number of main bars")
    db: float = Field(..., gt=0, description="Main bar diameter in mm")
    ds: float = Field(..., gt=0, description="Stirrup diameter in mm")
    ss: float = Field(..., gt=0, description="Stirrup spacing in mm")
    legs: int = Field(default=2, ge=1, description="Number of stirrup legs")


class DesignCheckInputs(BaseModel):
    """Extra inputs used only by the detailed checker."""
    model_config = ConfigDict(frozen=True)

    masonry_shear_strength_vm: float = Field(default=0.0, ge=0, description="vm in MPa")
    min_shear_reinforcement_waived: bool = False


class SLSDesignInputs(BaseModel):
    """Service load inputs."""
    model_config = ConfigDict(frozen=True)

    service_moment: float = Field(default=38.0, ge=0, description="M*s in kNm")
    shrinkage_strain: float = Field(default=600e-6, ge=0, description="Free shrinkage strain")
    crack_width_limit: float = Field(default=0.3, gt=0, description="Crack width limit in mm")


class ProjectInfo(BaseModel):
    """Job details printed on reports."""
    id: str = Field(default_factory=lambda: str(uuid4()))
    project_name: str = "My RC Beam Project"
    project_no: str = "P-001"
    client: str = "Client Name"
    date: str = Field(default_factory=lambda: datetime.now().date().isoformat())
    designer: str = "Your Name"
    beam_mark: str = "BM1"
    note: str = ""


class BeamDesignRecord(BaseModel):
    """Complete design record as stored in a design file.

    The calculation functions only consume the nested models.
    """
    id: str = Field(default_factory=lambda: str(uuid4()))
    project_info: ProjectInfo = Field(default_factory=ProjectInfo)
    code_standard: str = "NZS3101"
    design_forces: DesignForces = Field(
        default_factory=lambda: DesignForces(moment=50, shear=50)
    )
    beam_geometry: BeamGeometry = Field(
        default_factory=lambda: BeamGeometry(breadth=200, depth=400, cover=30, span=5)
    )
    material_properties: MaterialProperties = Field(default_factory=MaterialProperties)
    final_reinforcement: Optional[FinalReinforcement] = None
    design_check_inputs: DesignCheckInputs = Field(default_factory=DesignCheckInputs)
    sls_design_inputs: SLSDesignInputs = Field(default_factory=SLSDesignInputs)
    created_at: datetime = Field(default_factory=datetime.now)
    last_modified: datetime = Field(default_factory=datetime.now)

    @field_validator("code_standard")
    @classmethod
    def _known_standard(cls, value: str) -> str:
        if value.upper().replace(" ", "") not in ("NZS3101", "NZS4230"):
            raise ValueError(f"Unsupported code standard: {value}")
        return value
