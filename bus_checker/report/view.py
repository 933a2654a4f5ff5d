from __future__ import annotations

from dataclasses import dataclass

from bus_checker.checks.evaluator import CheckResult, ComplianceReport, Measurement
from bus_checker.profiles.registry import BusProfile


@dataclass(frozen=True)
class StatusText:
    state: str  # "idle" | "pass" | "fail"
    label: str
    pill: str


IDLE_STATUS = StatusText(state="idle", label="Awaiting input", pill="No run yet")

PASS_STATUS = StatusText(
    state="pass",
    label="Result: All checked parameters are within illustrative limits.",
    pill="PASS (Demo)",
)

FAIL_STATUS = StatusText(
    state="fail",
    label="Result: One or more parameters exceed illustrative limits.",
    pill="NOT COMPLIANT (Demo)",
)

EMPTY_CHECKLIST = "Run a compliance check to see individual requirement results."

DISCLAIMER = (
    "Simplified demo using illustrative limits. "
    "Not an authoritative MIL-STD-704 compliance assessment."
)


def voltage_unit(profile: BusProfile) -> str:
    return "VAC" if profile.has_frequency else "VDC"


def voltage_input_unit(profile: BusProfile) -> str:
    """Unit shown next to the steady-state voltage input."""
    return "VAC (RMS)" if profile.has_frequency else "VDC"


def overall_status(report: ComplianceReport) -> StatusText:
    return PASS_STATUS if report.overall_pass else FAIL_STATUS


def check_pill(result: CheckResult) -> str:
    return "Within limit" if result.passed else "Out of limit"


def _transient(percent, duration) -> str:
    if percent is None or duration is None:
        return "Not provided"
    return f"{percent:.1f} % for {duration:.0f} ms"


def summary_rows(profile: BusProfile, m: Measurement) -> list[tuple[str, str]]:
    unit = voltage_unit(profile)

    if m.steady_voltage is not None:
        voltage = f"{m.steady_voltage:.2f} {unit}"
    else:
        voltage = "–"

    if not profile.has_frequency:
        frequency = "N/A"
    elif m.steady_frequency is not None:
        frequency = f"{m.steady_frequency:.2f} Hz"
    else:
        frequency = "Not provided"

    ripple = f"{m.ripple:.2f} %" if m.ripple is not None else "Not provided"

    return [
        ("Bus type", profile.label),
        ("Nominal", f"{profile.nominal_voltage:g} {unit}"),
        ("Steady-state voltage", voltage),
        ("Frequency", frequency),
        ("Ripple / THD", ripple),
        ("Undervoltage transient", _transient(m.uv_dip_percent, m.uv_dip_duration)),
        ("Overvoltage transient", _transient(m.ov_surge_percent, m.ov_surge_duration)),
    ]
