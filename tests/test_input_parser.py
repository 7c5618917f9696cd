"""Tests for YAML design file parsing."""
import pytest
import yaml

from nzbeam.input_parser import (
    InputError, default_record, generate_template, parse_design_data, parse_design_file,
)


def _write(tmp_path, text):
    path = tmp_path / "beam.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestTemplate:

    def test_template_is_valid_yaml(self):
        data = yaml.safe_load(generate_template())
        assert data["beam_geometry"]["breadth"] == 200
        assert data["materials"]["section_grade"] == "C30"

    def test_default_record(self):
        record = default_record()
        assert record.design_forces.moment == 50
        assert record.design_forces.phi_b == 0.85
        assert record.beam_geometry.depth == 400
        assert record.material_properties.concrete_fc == 30
        assert record.material_properties.concrete_ec == 25084
        assert record.final_reinforcement.n == 2
        assert record.sls_design_inputs.service_moment == 38

    def test_template_round_trips_through_file(self, tmp_path):
        record = parse_design_file(_write(tmp_path, generate_template()))
        assert record.project_info.beam_mark == "BM1"


class TestParseDesignData:

    def test_empty_mapping_uses_defaults(self):
        record = parse_design_data({})
        assert record.beam_geometry.breadth == 200
        assert record.final_reinforcement is None
        assert record.material_properties.main_bar_grade_name == "500E"

    def test_grade_names_resolved(self):
        record = parse_design_data({"materials": {"section_grade": "C40", "main_bar_grade": "300E"}})
        materials = record.material_properties
        assert materials.concrete_fc == 40
        assert materials.concrete_ec == 27898
        assert materials.main_bar_fy == 300

    def test_explicit_value_overrides_grade(self):
        record = parse_design_data({"materials": {"section_grade": "C40", "concrete_fc": 42}})
        assert record.material_properties.concrete_fc == 42
        assert record.material_properties.concrete_ec == 27898

    def test_masonry_grade(self):
        record = parse_design_data({"materials": {
            "section_material_type": "masonry", "section_grade": "Observation Type A",
        }})
        assert record.material_properties.is_masonry
        assert record.material_properties.concrete_fc == 12

    def test_unknown_grade(self):
        with pytest.raises(InputError, match="not found"):
            parse_design_data({"materials": {"section_grade": "C99"}})

    def test_all_errors_reported_together(self):
        with pytest.raises(InputError) as exc_info:
            parse_design_data({
                "beam_geometry": {"breadth": -1},
                "design_forces": {"phi_b": 1.5},
            })
        message = str(exc_info.value)
        assert "2 input error(s)" in message
        assert "beam_geometry.breadth" in message
        assert "design_forces.phi_b" in message

    def test_cover_must_be_inside_depth(self):
        with pytest.raises(InputError, match="cover"):
            parse_design_data({"beam_geometry": {"breadth": 200, "depth": 100, "cover": 100}})

    def test_bad_reinforcement(self):
        with pytest.raises(InputError, match="final_reinforcement.n"):
            parse_design_data({"final_reinforcement": {"n": 0, "db": 16, "ds": 10, "ss": 200}})

    def test_section_must_be_mapping(self):
        with pytest.raises(InputError, match="must be a mapping"):
            parse_design_data({"design_forces": [1, 2]})

    def test_unsupported_code(self):
        with pytest.raises(InputError, match="Unsupported code standard"):
            parse_design_data({"code_standard": "ACI318"})

    def test_root_must_be_mapping(self):
        with pytest.raises(InputError):
            parse_design_data([1, 2, 3])


class TestParseDesignFile:

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_design_file(tmp_path / "nope.yaml")

    def test_yaml_syntax_error(self, tmp_path):
        with pytest.raises(InputError, match="YAML syntax error"):
            parse_design_file(_write(tmp_path, "design_forces: [unclosed\n"))

    def test_empty_file_gives_defaults(self, tmp_path):
        record = parse_design_file(_write(tmp_path, ""))
        assert record.design_forces.shear == 50


class TestSectionGradeDefaults:

    def test_masonry_without_section_grade(self):
        record = parse_design_data({"materials": {
            "section_material_type": "masonry", "main_bar_grade": "500E",
        }})
        materials = record.material_properties
        assert materials.is_masonry
        assert materials.concrete_grade_name == "Observation Type A"
        assert materials.concrete_fc == 12
        assert materials.main_bar_fy == 500

    def test_concrete_without_section_grade_keeps_c30(self):
        record = parse_design_data({"materials": {"stirrup_grade": "500E"}})
        assert record.material_properties.concrete_grade_name == "C30"
        assert record.material_properties.stirrup_fys == 500

    def test_unknown_section_type(self):
        with pytest.raises(InputError, match="not recognised"):
            parse_design_data({"materials": {"section_material_type": "timber", "main_bar_grade": "500E"}})
