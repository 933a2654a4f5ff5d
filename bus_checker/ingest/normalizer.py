from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping, Optional

from bus_checker.checks.evaluator import Measurement


@dataclass(frozen=True)
class MeasurementField:
    name: str  # Measurement attribute
    form_id: str  # input id in the form / JSON key
    label: str
    unit: str


MEASUREMENT_FIELDS: tuple[MeasurementField, ...] = (
    MeasurementField("steady_voltage", "steadyVoltage", "Steady-state voltage", "V"),
    MeasurementField("steady_frequency", "steadyFrequency", "Steady-state frequency", "Hz"),
    MeasurementField("ripple", "ripple", "Ripple / THD", "%"),
    MeasurementField("uv_dip_percent", "uvDipPercent", "Undervoltage dip", "%"),
    MeasurementField("uv_dip_duration", "uvDipDuration", "Undervoltage duration", "ms"),
    MeasurementField("ov_surge_percent", "ovSurgePercent", "Overvoltage surge", "%"),
    MeasurementField("ov_surge_duration", "ovSurgeDuration", "Overvoltage duration", "ms"),
)


def parse_number(raw: object) -> Optional[float]:
    """
    Empty, missing, unparseable or non-finite input -> None ("not provided").
    Never raises.
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, (int, float)):
        num = float(raw)
    else:
        text = str(raw).strip()
        if text == "":
            return None
        try:
            num = float(text)
        except ValueError:
            return None

    return num if math.isfinite(num) else None


def normalize_measurement(raw: Mapping[str, object]) -> Measurement:
    """
    Build a Measurement from form-like input.
    Keys may be attribute names (steady_voltage) or form ids (steadyVoltage).
    """
    values: dict[str, Optional[float]] = {}
    for f in MEASUREMENT_FIELDS:
        if f.name in raw:
            values[f.name] = parse_number(raw[f.name])
        else:
            values[f.name] = parse_number(raw.get(f.form_id))
    return Measurement(**values)
