# Data models for NZS 3101 / NZS 4230 beam design
from .inputs import (
    SectionMaterialType, DesignForces, BeamGeometry, MaterialProperties,
    FinalReinforcement, DesignCheckInputs, SLSDesignInputs,
    ProjectInfo, BeamDesignRecord
)
from .outputs import (
    CheckStatus, CheckResult, SLSCheckError, DesignOption, overall_status
)
