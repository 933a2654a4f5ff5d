# Simplified reference limits (illustrative, not authoritative).
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional


class ProfileNotFoundError(KeyError):
    """Raised when a bus-type identifier is not in the registry."""

    def __init__(self, bus_type: str):
        super().__init__(bus_type)
        self.bus_type = bus_type

    def __str__(self) -> str:
        known = ", ".join(PROFILES)
        return f"Unknown bus type {self.bus_type!r} (known: {known})"


@dataclass(frozen=True)
class BusProfile:
    id: str
    label: str
    nominal_voltage: float

    steady_voltage_range: tuple[float, float]  # V

    # Ripple on DC, THD on AC (%)
    ripple_percent_max: float

    uv_dip_percent_max: float  # %
    uv_duration_max_ms: float
    ov_surge_percent_max: float  # %
    ov_duration_max_ms: float

    has_frequency: bool = False
    frequency_range: Optional[tuple[float, float]] = None  # Hz

    input_hint: str = ""

    @property
    def is_ac(self) -> bool:
        return self.has_frequency


def _build(*profiles: BusProfile) -> Mapping[str, BusProfile]:
    table: dict[str, BusProfile] = {}
    for p in profiles:
        if p.id in table:
            raise ValueError(f"Duplicate bus profile id: {p.id}")
        if p.has_frequency and p.frequency_range is None:
            raise ValueError(f"AC profile {p.id} needs a frequency range")
        table[p.id] = p
    return MappingProxyType(table)


PROFILES: Mapping[str, BusProfile] = _build(
    BusProfile(
        id="28vdc",
        label="28 VDC Main Bus (Illustrative)",
        nominal_voltage=28,
        steady_voltage_range=(22, 29),
        ripple_percent_max=5,
        uv_dip_percent_max=20,
        uv_duration_max_ms=50,
        ov_surge_percent_max=20,
        ov_duration_max_ms=50,
        has_frequency=False,
        frequency_range=None,
        input_hint="Example: 27.8 VDC on a nominal 28 V bus.",
    ),
    BusProfile(
        id="115vac400",
        label="115 VAC, 400 Hz (Illustrative)",
        nominal_voltage=115,
        steady_voltage_range=(108, 118),
        ripple_percent_max=5,
        uv_dip_percent_max=20,
        uv_duration_max_ms=50,
        ov_surge_percent_max=20,
        ov_duration_max_ms=50,
        has_frequency=True,
        frequency_range=(395, 405),
        input_hint="Example: 113.5 VAC RMS on a 115 V, 400 Hz bus.",
    ),
)


def get_profile(bus_type: str) -> BusProfile:
    """Exact-match lookup; no trimming or case folding."""
    try:
        return PROFILES[bus_type]
    except (KeyError, TypeError):
        raise ProfileNotFoundError(bus_type) from None


def list_profiles() -> list[BusProfile]:
    return list(PROFILES.values())
