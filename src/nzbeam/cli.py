"""Command-line interface for the NZ beam design tool.

Usage::

    nzbeam template > beam.yaml
    nzbeam options beam.yaml [--limit N]
    nzbeam check beam.yaml [--option K]
    nzbeam sls beam.yaml [--option K]
    nzbeam report beam.yaml -o report.pdf [--option K]
    nzbeam grades
"""

from __future__ import annotations

from pathlib import Path

import click
from loguru import logger

from nzbeam import __version__
from nzbeam.core import generate_options, run_detailed_check, run_sls_check
from nzbeam.input_parser import InputError, generate_template, parse_design_file
from nzbeam.materials import MATERIAL_TYPES, load_material_table
from nzbeam.models.inputs import BeamDesignRecord, FinalReinforcement
from nzbeam.models.outputs import (
    CheckResult, CheckStatus, DesignOption, SLSCheckError, overall_status,
)
from nzbeam.utils.logging import configure_logging

_STATUS_COLOURS = {
    CheckStatus.PASS: "green",
    CheckStatus.FAIL: "red",
    CheckStatus.INFO: None,
}

_option_argument = click.option(
    "--option", "option_index",
    type=click.IntRange(min=1),
    default=None,
    help="Use the K-th ranked option instead of the file's final_reinforcement.",
)


def _load_record(input_file: str) -> BeamDesignRecord:
    try:
        return parse_design_file(input_file)
    except (InputError, FileNotFoundError) as exc:
        click.secho(f"Error parsing input: {exc}", fg="red", err=True)
        raise SystemExit(1) from exc


def _resolve_reinforcement(
    record: BeamDesignRecord,
    option_index: int | None,
    options: list[DesignOption] | None = None,
) -> FinalReinforcement | None:
    """The file's reinforcement, or the chosen ranked option.

    *options* is the already generated ranking, if the caller has one.
    """
    if option_index is None:
        return record.final_reinforcement

    if options is None:
        options = generate_options(
            record.design_forces, record.beam_geometry, record.material_properties
        )
    if not options:
        click.secho(
            "No feasible design found. Increase the section size or material strengths.",
            fg="red", err=True,
        )
        raise SystemExit(1)
    if option_index > len(options):
        click.secho(
            f"Option {option_index} requested but only {len(options)} available.",
            fg="red", err=True,
        )
        raise SystemExit(1)

    chosen = options[option_index - 1]
    logger.info("Using option {}: {}", option_index, chosen.key)
    return chosen.to_reinforcement()


def _echo_results(results: list[CheckResult]) -> None:
    width = max((len(r.check_name) for r in results), default=0)
    for r in results:
        status = r.status.value.upper()
        click.echo(f"  {r.check_name:<{width}}  {r.value:<22} {r.limit:<26} ", nl=False)
        click.secho(status, fg=_STATUS_COLOURS[r.status])
        if r.notes:
            click.echo(f"  {'':<{width}}  {r.notes}")


# ---------------------------------------------------------------------------
# Top-level group
# ---------------------------------------------------------------------------

@click.group()
@click.version_option(version=__version__, package_name="nzbeam-design")
@click.option("-v", "--verbose", is_flag=True, help="Show debug messages.")
def main(verbose: bool) -> None:
    """Rectangular beam design - NZS 3101 & NZS 4230."""
    configure_logging(verbose)


# ---------------------------------------------------------------------------
# template
# ---------------------------------------------------------------------------

@main.command()
def template() -> None:
    """Print a sample input YAML to stdout."""
    click.echo(generate_template(), nl=False)


# ---------------------------------------------------------------------------
# options
# ---------------------------------------------------------------------------

@main.command()
@click.argument("input_file", type=click.Path(exists=True))
@click.option("--limit", type=click.IntRange(min=1), default=10, show_default=True,
              help="Number of ranked options to show.")
def options(input_file: str, limit: int) -> None:
    """List feasible reinforcement options for INPUT_FILE, best first."""
    record = _load_record(input_file)
    materials = record.material_properties
    found = generate_options(record.design_forces, record.beam_geometry, materials)

    if not found:
        click.secho(
            "No feasible design found. Increase the section size or material strengths.",
            fg="yellow",
        )
        return

    click.echo(f"{len(found)} feasible option(s); showing {min(limit, len(found))}.\n")
    click.echo(f"  {'#':>3}  {'Main bars':<12} {'Stirrups':<26} {'M util':>7} {'V util':>7}  Warnings")
    for i, opt in enumerate(found[:limit], 1):
        click.echo(
            f"  {i:>3}  {opt.bar_label(materials.main_bar_grade_name):<12} "
            f"{opt.stirrup_label(materials.stirrup_grade_name):<26} "
            f"{opt.m_util:>7.3f} {opt.v_util:>7.3f}  {', '.join(opt.warnings)}"
        )


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------

@main.command()
@click.argument("input_file", type=click.Path(exists=True))
@_option_argument
def check(input_file: str, option_index: int | None) -> None:
    """Run the detailed ULS checks for INPUT_FILE."""
    record = _load_record(input_file)
    reinforcement = _resolve_reinforcement(record, option_index)
    if reinforcement is None:
        click.secho("No final reinforcement selected.", fg="yellow")
        return

    results = run_detailed_check(
        record.design_forces, record.beam_geometry, record.material_properties,
        reinforcement, record.design_check_inputs,
    )
    click.echo(f"Detailed checks ({record.code_standard}):\n")
    _echo_results(results)
    status = overall_status(results)
    click.secho(f"\nOverall: {status.value.upper()}", fg=_STATUS_COLOURS[status], bold=True)


# ---------------------------------------------------------------------------
# sls
# ---------------------------------------------------------------------------

@main.command()
@click.argument("input_file", type=click.Path(exists=True))
@_option_argument
def sls(input_file: str, option_index: int | None) -> None:
    """Run the serviceability checks for INPUT_FILE."""
    record = _load_record(input_file)
    reinforcement = _resolve_reinforcement(record, option_index)

    results = run_sls_check(
        record.design_forces, record.beam_geometry, record.material_properties,
        reinforcement, record.sls_design_inputs,
    )
    if isinstance(results, SLSCheckError):
        click.secho(f"SLS check failed: {results.error}", fg="red", err=True)
        raise SystemExit(1)

    click.echo("Serviceability checks:\n")
    _echo_results(results)


# ---------------------------------------------------------------------------
# report
# ---------------------------------------------------------------------------

@main.command()
@click.argument("input_file", type=click.Path(exists=True))
@click.option("-o", "--output", default="beam_report.pdf", show_default=True,
              help="Output PDF path.")
@_option_argument
def report(input_file: str, output: str, option_index: int | None) -> None:
    """Write a PDF calculation report for INPUT_FILE."""
    from nzbeam.reports import PDFReportGenerator

    record = _load_record(input_file)
    forces, geometry, materials = (
        record.design_forces, record.beam_geometry, record.material_properties
    )
    found = generate_options(forces, geometry, materials)
    reinforcement = _resolve_reinforcement(record, option_index, found)

    check_results = run_detailed_check(
        forces, geometry, materials, reinforcement, record.design_check_inputs
    )
    sls_results = run_sls_check(
        forces, geometry, materials, reinforcement, record.sls_design_inputs
    )

    pdf_bytes = PDFReportGenerator().generate_report(
        record, found, check_results, sls_results, reinforcement=reinforcement
    )
    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(pdf_bytes)
    click.secho(f"Report written to {output_path}", fg="green")


# ---------------------------------------------------------------------------
# grades
# ---------------------------------------------------------------------------

@main.command()
def grades() -> None:
    """List the material grade table."""
    table = load_material_table()
    for mat_type in MATERIAL_TYPES:
        click.echo(f"{mat_type} (ultimate strain {table.strain(mat_type):g})")
        for name in table.grade_names(mat_type):
            row = table.grade(mat_type, name)
            click.echo(f"  {name:<20} strength {row.strength:>6g} MPa   modulus {row.modulus:>8g} MPa")


# ---------------------------------------------------------------------------
# Allow ``python -m nzbeam.cli``
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    main()
