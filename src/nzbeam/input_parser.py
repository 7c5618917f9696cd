"""Parse and validate YAML design files for rectangular beam design.

Reads a design YAML file, fills defaults for absent sections, resolves
material grade names through the grade table and validates every section
with the pydantic input models. All problems are collected and reported
together in one :class:`InputError`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from nzbeam.materials import MaterialGradeTable, load_material_table
from nzbeam.models.inputs import (
    BeamDesignRecord, BeamGeometry, DesignCheckInputs, DesignForces,
    FinalReinforcement, MaterialProperties, ProjectInfo, SLSDesignInputs,
)


class InputError(Exception):
    """Raised when the YAML input is invalid or incomplete."""


# Section name -> (model, default field values)
_SECTIONS: dict[str, tuple[type, dict[str, Any]]] = {
    "project": (ProjectInfo, {}),
    "design_forces": (DesignForces, {"moment": 50, "shear": 50}),
    "beam_geometry": (BeamGeometry, {"breadth": 200, "depth": 400, "cover": 30, "span": 5}),
    "design_check_inputs": (DesignCheckInputs, {}),
    "sls_design_inputs": (SLSDesignInputs, {}),
}

# Grade-name keys accepted in the ``materials`` section
_GRADE_KEYS = ("section_grade", "main_bar_grade", "stirrup_grade")


def _format_validation_error(section: str, exc: ValidationError) -> list[str]:
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"])
        path = f"{section}.{loc}" if loc else section
        messages.append(f"{path}: {err['msg']}")
    return messages


def _build_section(
    name: str,
    raw: dict[str, Any],
    errors: list[str],
) -> Any:
    model, defaults = _SECTIONS[name]
    data = raw.get(name)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        errors.append(f"{name}: must be a mapping, got {type(data).__name__}")
        return None
    try:
        return model(**{**defaults, **data})
    except ValidationError as exc:
        errors.extend(_format_validation_error(name, exc))
        return None


def _build_materials(
    data: Any,
    table: MaterialGradeTable,
    errors: list[str],
) -> MaterialProperties | None:
    """Materials are given either by grade names or as explicit properties.

    Grade names are resolved first; any explicit numeric field then
    overrides the table value.
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        errors.append(f"materials: must be a mapping, got {type(data).__name__}")
        return None

    data = dict(data)
    grade_args = {key: data.pop(key) for key in _GRADE_KEYS if key in data}
    section_type = data.get("section_material_type", "concrete")

    base: dict[str, Any] = {}
    if grade_args and "section_grade" not in grade_args:
        try:
            section_grades = table.grade_names(str(section_type))
        except KeyError as exc:
            errors.append(f"materials: {exc}")
            return None
        default_grade = MaterialProperties().concrete_grade_name
        if default_grade not in section_grades and section_grades:
            default_grade = section_grades[0]
        grade_args["section_grade"] = default_grade

    if grade_args:
        try:
            props = table.material_properties(section_type=section_type, **grade_args)
        except (KeyError, ValueError) as exc:
            errors.append(f"materials: {exc}")
            return None
        base = props.model_dump()

    try:
        return MaterialProperties(**{**base, **data})
    except ValidationError as exc:
        errors.extend(_format_validation_error("materials", exc))
        return None


def parse_design_data(
    raw: dict[str, Any],
    table: MaterialGradeTable | None = None,
) -> BeamDesignRecord:
    """Validate an already-loaded design mapping.

    Raises
    ------
    InputError
        If validation fails (the message lists every problem found).
    """
    if not isinstance(raw, dict):
        raise InputError("YAML root must be a mapping (dict)")
    table = table or load_material_table()

    errors: list[str] = []
    built = {name: _build_section(name, raw, errors) for name in _SECTIONS}
    materials = _build_materials(raw.get("materials"), table, errors)

    reinforcement = None
    if raw.get("final_reinforcement") is not None:
        data = raw["final_reinforcement"]
        if not isinstance(data, dict):
            errors.append("final_reinforcement: must be a mapping")
        else:
            try:
                reinforcement = FinalReinforcement(**data)
            except ValidationError as exc:
                errors.extend(_format_validation_error("final_reinforcement", exc))

    code_standard = str(raw.get("code_standard", "NZS3101"))

    if errors:
        detail = "\n  ".join(errors)
        raise InputError(f"Found {len(errors)} input error(s):\n  {detail}")

    try:
        return BeamDesignRecord(
            project_info=built["project"],
            code_standard=code_standard,
            design_forces=built["design_forces"],
            beam_geometry=built["beam_geometry"],
            material_properties=materials,
            final_reinforcement=reinforcement,
            design_check_inputs=built["design_check_inputs"],
            sls_design_inputs=built["sls_design_inputs"],
        )
    except ValidationError as exc:
        detail = "\n  ".join(_format_validation_error("record", exc))
        raise InputError(f"Invalid design record:\n  {detail}") from exc


def parse_design_file(
    yaml_path: str | Path,
    table: MaterialGradeTable | None = None,
) -> BeamDesignRecord:
    """Read and validate a design YAML file.

    Raises
    ------
    FileNotFoundError
        If *yaml_path* does not exist.
    InputError
        If the YAML is malformed or validation fails.
    """
    path = Path(yaml_path)
    if not path.is_file():
        raise FileNotFoundError(f"Input file not found: {yaml_path}")

    with open(path, "r", encoding="utf-8") as fh:
        try:
            raw = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise InputError(f"YAML syntax error: {exc}") from exc

    return parse_design_data(raw if raw is not None else {}, table)


# ---------------------------------------------------------------------------
# Template
# ---------------------------------------------------------------------------

_TEMPLATE_YAML = """\
# Rectangular beam design input (NZS 3101 / NZS 4230)
# Units: kN, kNm, mm, MPa unless noted

project:
  project_name: "My RC Beam Project"
  project_no: "P-001"
  client: "Client Name"
  designer: "Your Name"
  beam_mark: "BM1"
  note: ""

code_standard: NZS3101

design_forces:
  moment: 50          # M* (kNm)
  shear: 50           # V* (kN)
  phi_b: 0.85
  phi_s: 0.75
  axial_load: 0       # N* (kN) - not used in capacity
  phi_o: 0.85

beam_geometry:
  breadth: 200        # B (mm)
  depth: 400          # D (mm)
  cover: 30           # mm, to the stirrups
  span: 5             # m

materials:
  section_material_type: concrete   # concrete | masonry
  section_grade: C30
  main_bar_grade: 500E
  stirrup_grade: 300E

final_reinforcement:
  n: 2                # number of main bars
  db: 16              # main bar diameter (mm)
  ds: 10              # stirrup diameter (mm)
  ss: 200             # stirrup spacing (mm)
  legs: 2

design_check_inputs:
  masonry_shear_strength_vm: 0      # vm (MPa), masonry only
  min_shear_reinforcement_waived: false

sls_design_inputs:
  service_moment: 38                # M*s (kNm)
  shrinkage_strain: 0.0006
  crack_width_limit: 0.3            # mm
"""


def generate_template() -> str:
    """Return a complete sample YAML design file as a string."""
    return _TEMPLATE_YAML


def default_record() -> BeamDesignRecord:
    """Design record built from the template defaults."""
    return parse_design_data(yaml.safe_load(_TEMPLATE_YAML))
