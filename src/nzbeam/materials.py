"""Material grade reference table for concrete, masonry and reinforcing steel.

Reads grade strengths, moduli and ultimate strains from
``data/material_grades.yaml`` and builds :class:`MaterialProperties` from
grade names.

Units
-----
* Strengths (f'c, f'm, fy) and moduli (Ec, Em, Es) in **MPa**.
* Strains are dimensionless.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from nzbeam.models.inputs import MaterialProperties, SectionMaterialType
from nzbeam.utils.constants import DEFAULT_CONCRETE_STRAIN, DEFAULT_REBAR_STRAIN

MATERIAL_TYPES = ("concrete", "masonry", "rebar")

_DEFAULT_TABLE_PATH = Path(__file__).resolve().parent / "data" / "material_grades.yaml"
_DEFAULT_STRAINS = {
    "concrete": DEFAULT_CONCRETE_STRAIN,
    "masonry": DEFAULT_CONCRETE_STRAIN,
    "rebar": DEFAULT_REBAR_STRAIN,
}


@dataclass(frozen=True)
class MaterialGrade:
    """One row of the grade table.

    Attributes
    ----------
    name : str
        Grade name as shown to the user, e.g. ``"C30"`` or ``"500E"``.
    strength : float
        f'c, f'm or fy, MPa.
    modulus : float
        Ec, Em or Es, MPa.
    """

    name: str
    strength: float
    modulus: float


class MaterialGradeTable:
    """Read-only lookup of grades keyed by material type and grade name."""

    def __init__(self, data: dict[str, Any]):
        self._grades: dict[str, dict[str, MaterialGrade]] = {}
        self._strains: dict[str, float] = {}
        for mat_type in MATERIAL_TYPES:
            section = data.get(mat_type) or {}
            if "strain" in section:
                self._strains[mat_type] = float(section["strain"])
            self._grades[mat_type] = {
                str(name): MaterialGrade(
                    name=str(name),
                    strength=float(row["strength"]),
                    modulus=float(row["modulus"]),
                )
                for name, row in (section.get("grades") or {}).items()
            }

    def _check_type(self, mat_type: str) -> None:
        if mat_type not in MATERIAL_TYPES:
            raise KeyError(
                f"Material type '{mat_type}' not recognised.  "
                f"Available: {list(MATERIAL_TYPES)}"
            )

    def grade_names(self, mat_type: str) -> list[str]:
        """Grade names for *mat_type* in table order."""
        self._check_type(mat_type)
        return list(self._grades[mat_type])

    def grade(self, mat_type: str, name: str) -> MaterialGrade:
        """Look up one grade.

        Raises
        ------
        KeyError
            If the type or grade is not in the table.
        """
        self._check_type(mat_type)
        grades = self._grades[mat_type]
        if name not in grades:
            raise KeyError(
                f"{mat_type} grade '{name}' not found.  "
                f"Available grades: {list(grades)}"
            )
        return grades[name]

    def strain(self, mat_type: str) -> float:
        """Ultimate strain for *mat_type*, falling back to 0.003 / 0.0025."""
        self._check_type(mat_type)
        return self._strains.get(mat_type, _DEFAULT_STRAINS[mat_type])

    def material_properties(
        self,
        section_type: str = "concrete",
        section_grade: str = "C30",
        main_bar_grade: str = "500E",
        stirrup_grade: str = "300E",
    ) -> MaterialProperties:
        """Build :class:`MaterialProperties` from grade names."""
        section_type = SectionMaterialType(section_type).value
        section_row = self.grade(section_type, section_grade)
        main_row = self.grade("rebar", main_bar_grade)
        stirrup_row = self.grade("rebar", stirrup_grade)
        return MaterialProperties(
            section_material_type=section_type,
            concrete_grade_name=section_row.name,
            concrete_fc=section_row.strength,
            concrete_ec=section_row.modulus,
            main_bar_grade_name=main_row.name,
            main_bar_fy=main_row.strength,
            main_bar_es=main_row.modulus,
            stirrup_grade_name=stirrup_row.name,
            stirrup_fys=stirrup_row.strength,
            stirrup_es=stirrup_row.modulus,
        )


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

_table_cache: MaterialGradeTable | None = None


def load_material_table(path: Path | str | None = None) -> MaterialGradeTable:
    """Load the grade table from YAML.

    The packaged table is cached; an explicit *path* is always re-read.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    """
    global _table_cache
    if path is None and _table_cache is not None:
        return _table_cache

    table_path = Path(path) if path is not None else _DEFAULT_TABLE_PATH
    with open(table_path, encoding="utf-8") as fh:
        table = MaterialGradeTable(yaml.safe_load(fh) or {})

    if path is None:
        _table_cache = table
    return table


def _clear_material_table_cache() -> None:
    """Reset the internal cache (useful in tests)."""
    global _table_cache
    _table_cache = None
