"""Tests for the PDF calculation report."""
import pytest

from nzbeam.core import generate_options, run_detailed_check, run_sls_check
from nzbeam.models.outputs import SLSCheckError
from nzbeam.reports import PDFReportGenerator


@pytest.fixture
def generator():
    return PDFReportGenerator()


def _run(record):
    args = (record.design_forces, record.beam_geometry, record.material_properties)
    options = generate_options(*args)
    checks = run_detailed_check(*args, record.final_reinforcement, record.design_check_inputs)
    sls = run_sls_check(*args, record.final_reinforcement, record.sls_design_inputs)
    return options, checks, sls


class TestPDFReport:

    def test_full_report(self, generator, record):
        options, checks, sls = _run(record)
        pdf = generator.generate_report(record, options, checks, sls)
        assert pdf.startswith(b"%PDF")
        assert len(pdf) > 1000

    def test_sls_error_report(self, generator, record):
        options, checks, _ = _run(record)
        pdf = generator.generate_report(
            record, options, checks, SLSCheckError(error="Designed reinforcement not set.")
        )
        assert pdf.startswith(b"%PDF")

    def test_report_without_options_or_reinforcement(self, generator, record):
        record = record.model_copy(update={"final_reinforcement": None})
        pdf = generator.generate_report(record, [], [], None)
        assert pdf.startswith(b"%PDF")

    def test_option_table_truncated(self, record):
        options, checks, sls = _run(record)
        pdf = PDFReportGenerator(max_options=1).generate_report(record, options, checks, sls)
        assert pdf.startswith(b"%PDF")
