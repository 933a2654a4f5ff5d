from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from bus_checker.profiles.registry import BusProfile, get_profile


@dataclass(frozen=True)
class Measurement:
    """Measured values for one run. None means "not provided", not zero."""

    steady_voltage: Optional[float] = None  # V
    steady_frequency: Optional[float] = None  # Hz
    ripple: Optional[float] = None  # % ripple (DC) or THD (AC)
    uv_dip_percent: Optional[float] = None
    uv_dip_duration: Optional[float] = None  # ms
    ov_surge_percent: Optional[float] = None
    ov_surge_duration: Optional[float] = None  # ms


@dataclass(frozen=True)
class CheckResult:
    label: str
    passed: bool
    detail: str


@dataclass(frozen=True)
class ComplianceReport:
    profile_id: str
    checks: tuple[CheckResult, ...]

    @property
    def overall_pass(self) -> bool:
        return all(c.passed for c in self.checks)

    @property
    def failed(self) -> list[CheckResult]:
        return [c for c in self.checks if not c.passed]


def _provided(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value)


def ripple_label(profile: BusProfile) -> str:
    return "AC Distortion / THD" if profile.has_frequency else "DC Ripple Voltage"


def _check_range(label: str, value: Optional[float], lo: float, hi: float, unit: str, missing: str) -> CheckResult:
    if not _provided(value):
        return CheckResult(label=label, passed=False, detail=missing)
    passed = lo <= value <= hi
    detail = f"Measured: {value:.2f} {unit}, Allowed: {lo:.1f}–{hi:.1f} {unit}"
    return CheckResult(label=label, passed=passed, detail=detail)


def _check_transient(
    label: str,
    percent: Optional[float],
    duration: Optional[float],
    percent_max: float,
    duration_max: float,
    missing: str,
) -> CheckResult:
    if not (_provided(percent) and _provided(duration)):
        return CheckResult(label=label, passed=False, detail=missing)
    # Depth and duration must both be within limits.
    passed = percent <= percent_max and duration <= duration_max
    detail = (
        f"Measured: {percent:.1f} % for {duration:.0f} ms, "
        f"Allowed: ≤ {percent_max:.1f} % for ≤ {duration_max:.0f} ms"
    )
    return CheckResult(label=label, passed=passed, detail=detail)


def evaluate_compliance(profile: BusProfile, m: Measurement) -> ComplianceReport:
    checks: list[CheckResult] = []

    # 1) Steady-state voltage
    v_min, v_max = profile.steady_voltage_range
    checks.append(
        _check_range(
            "Steady-State Voltage",
            m.steady_voltage,
            v_min,
            v_max,
            "V",
            missing="No measured voltage provided.",
        )
    )

    # 2) Frequency (AC only; DC reports never carry this row)
    if profile.has_frequency:
        f_min, f_max = profile.frequency_range
        checks.append(
            _check_range(
                "Steady-State Frequency",
                m.steady_frequency,
                f_min,
                f_max,
                "Hz",
                missing="No measured frequency provided for AC bus.",
            )
        )

    # 3) Ripple / distortion
    label = ripple_label(profile)
    if _provided(m.ripple):
        max_ripple = profile.ripple_percent_max
        checks.append(
            CheckResult(
                label=label,
                passed=m.ripple <= max_ripple,
                detail=f"Measured: {m.ripple:.1f} %, Allowed: ≤ {max_ripple:.1f} %",
            )
        )
    else:
        checks.append(CheckResult(label=label, passed=False, detail="No ripple / distortion value provided."))

    # 4) Undervoltage dip
    checks.append(
        _check_transient(
            "Transient Undervoltage",
            m.uv_dip_percent,
            m.uv_dip_duration,
            profile.uv_dip_percent_max,
            profile.uv_duration_max_ms,
            missing="Undervoltage dip percent and/or duration not provided.",
        )
    )

    # 5) Overvoltage surge
    checks.append(
        _check_transient(
            "Transient Overvoltage",
            m.ov_surge_percent,
            m.ov_surge_duration,
            profile.ov_surge_percent_max,
            profile.ov_duration_max_ms,
            missing="Overvoltage surge percent and/or duration not provided.",
        )
    )

    return ComplianceReport(profile_id=profile.id, checks=tuple(checks))


def evaluate_bus(bus_type: str, m: Measurement) -> ComplianceReport:
    """Look up the profile (raises ProfileNotFoundError) and evaluate."""
    return evaluate_compliance(get_profile(bus_type), m)
