from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from bus_checker.checks.evaluator import ComplianceReport, Measurement, evaluate_compliance
from bus_checker.config import settings
from bus_checker.ingest.normalizer import normalize_measurement
from bus_checker.profiles.registry import BusProfile, ProfileNotFoundError, get_profile, list_profiles
from bus_checker.report.pdf_report import build_pdf_report
from bus_checker.report.plots import plot_check_margins
from bus_checker.report.view import check_pill, overall_status, summary_rows
from bus_checker.utils.logging import console, error, info, verdict, warn

app = typer.Typer(add_completion=False, help="Check bus power-quality measurements against illustrative limits.")

EXIT_NOT_COMPLIANT = 1
EXIT_UNKNOWN_BUS = 2


# -------------------------
# Helpers
# -------------------------
def _print_report(profile: BusProfile, measurement: Measurement, report: ComplianceReport) -> None:
    table = Table(title=profile.label, show_lines=False)
    table.add_column("Check", style="bold", no_wrap=True)
    table.add_column("Result")
    table.add_column("Detail")

    for check in report.checks:
        style = "green" if check.passed else "red"
        table.add_row(check.label, f"[{style}]{check_pill(check)}[/{style}]", check.detail)
    console.print(table)

    summary = Table(show_header=False, box=None, padding=(0, 2))
    for name, value in summary_rows(profile, measurement):
        summary.add_row(name, value)
    console.print(summary)

    status = overall_status(report)
    verdict(report.overall_pass, f"{status.pill}: {status.label}")


def write_report(
    profile: BusProfile,
    measurement: Measurement,
    report: ComplianceReport,
    out_pdf: str,
) -> str:
    """PDF with a margin chart next to it (chart skipped when nothing was measured)."""
    chart_path = str(Path(out_pdf).with_suffix(".margins.png"))
    if not plot_check_margins(profile, measurement, chart_path):
        warn("No measured values to chart; report has no margin chart.")
        chart_path = None
    return build_pdf_report(out_pdf, profile, measurement, report, chart_path=chart_path)


# -------------------------
# Typer CLI
# -------------------------
@app.command()
def check(
    bus_type: str = typer.Argument(settings.default_bus_type, help="Bus profile id (see `profiles`)"),
    steady_voltage: Optional[str] = typer.Option(None, help="Steady-state voltage (V)"),
    steady_frequency: Optional[str] = typer.Option(None, help="Steady-state frequency (Hz), AC buses only"),
    ripple: Optional[str] = typer.Option(None, help="DC ripple or AC THD (%)"),
    uv_dip_percent: Optional[str] = typer.Option(None, help="Undervoltage dip depth (%)"),
    uv_dip_duration: Optional[str] = typer.Option(None, help="Undervoltage dip duration (ms)"),
    ov_surge_percent: Optional[str] = typer.Option(None, help="Overvoltage surge height (%)"),
    ov_surge_duration: Optional[str] = typer.Option(None, help="Overvoltage surge duration (ms)"),
    pdf: Optional[str] = typer.Option(None, help="Also write a printable PDF report to this path"),
):
    try:
        profile = get_profile(bus_type)
    except ProfileNotFoundError as e:
        error(str(e))
        raise typer.Exit(code=EXIT_UNKNOWN_BUS)

    measurement = normalize_measurement(
        {
            "steady_voltage": steady_voltage,
            "steady_frequency": steady_frequency,
            "ripple": ripple,
            "uv_dip_percent": uv_dip_percent,
            "uv_dip_duration": uv_dip_duration,
            "ov_surge_percent": ov_surge_percent,
            "ov_surge_duration": ov_surge_duration,
        }
    )
    if steady_frequency is not None and not profile.has_frequency:
        warn(f"{profile.label} has no frequency limits; --steady-frequency ignored.")

    report = evaluate_compliance(profile, measurement)
    _print_report(profile, measurement, report)

    if pdf:
        write_report(profile, measurement, report, pdf)

    if not report.overall_pass:
        raise typer.Exit(code=EXIT_NOT_COMPLIANT)


@app.command()
def profiles():
    """List the known bus profiles."""
    table = Table(title="Bus profiles (illustrative)")
    table.add_column("Id", style="bold", no_wrap=True)
    table.add_column("Label")
    table.add_column("Steady V")
    table.add_column("Frequency")
    table.add_column("Ripple/THD max")

    for p in list_profiles():
        lo, hi = p.steady_voltage_range
        freq = f"{p.frequency_range[0]:g}–{p.frequency_range[1]:g} Hz" if p.has_frequency else "N/A"
        table.add_row(p.id, p.label, f"{lo:g}–{hi:g} V", freq, f"{p.ripple_percent_max:g} %")
    console.print(table)
    info(f"Default bus type: {settings.default_bus_type}")


if __name__ == "__main__":
    app()
