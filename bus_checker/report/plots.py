from __future__ import annotations

from pathlib import Path
from typing import Optional

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt

from bus_checker.checks.evaluator import Measurement
from bus_checker.profiles.registry import BusProfile


def _pct_of(value: Optional[float], limit: float) -> Optional[float]:
    if value is None or limit <= 0:
        return None
    return value / limit * 100.0


def check_margins(profile: BusProfile, m: Measurement) -> list[tuple[str, float]]:
    """
    Each provided measurement as % of its limit (100 = at the limit).
    Range checks use the distance to the nearest edge of the band,
    so 100 is the edge and anything above is outside.
    """
    rows: list[tuple[str, float]] = []

    def band_pct(value: Optional[float], lo: float, hi: float) -> Optional[float]:
        if value is None:
            return None
        mid = (lo + hi) / 2.0
        half = (hi - lo) / 2.0
        if half <= 0:
            return None
        return abs(value - mid) / half * 100.0

    v_min, v_max = profile.steady_voltage_range
    rows.append(("Voltage", band_pct(m.steady_voltage, v_min, v_max)))

    if profile.has_frequency:
        f_min, f_max = profile.frequency_range
        rows.append(("Frequency", band_pct(m.steady_frequency, f_min, f_max)))

    rows.append(("THD" if profile.has_frequency else "Ripple", _pct_of(m.ripple, profile.ripple_percent_max)))

    if m.uv_dip_percent is not None and m.uv_dip_duration is not None:
        rows.append(("UV depth", _pct_of(m.uv_dip_percent, profile.uv_dip_percent_max)))
        rows.append(("UV duration", _pct_of(m.uv_dip_duration, profile.uv_duration_max_ms)))

    if m.ov_surge_percent is not None and m.ov_surge_duration is not None:
        rows.append(("OV depth", _pct_of(m.ov_surge_percent, profile.ov_surge_percent_max)))
        rows.append(("OV duration", _pct_of(m.ov_surge_duration, profile.ov_duration_max_ms)))

    return [(name, pct) for name, pct in rows if pct is not None]


def plot_check_margins(profile: BusProfile, m: Measurement, out_path: str) -> bool:
    """
    Horizontal bar chart, compact and PDF-friendly.
    Returns False (and writes nothing) when no value was provided.
    """
    rows = check_margins(profile, m)
    if not rows:
        return False

    out_path = str(out_path)
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)

    names = [r[0] for r in rows]
    pcts = [r[1] for r in rows]
    colors = ["#2E7D32" if p <= 100.0 else "#C62828" for p in pcts]

    fig = plt.figure(figsize=(6.6, 2.6), dpi=160)
    ax = fig.add_subplot(111)

    ax.barh(names, pcts, color=colors)
    ax.axvline(100.0, color="#333333", linewidth=1.2, linestyle="--")
    ax.invert_yaxis()
    ax.set_xlim(0, max(120.0, max(pcts) * 1.1))
    ax.set_title(f"{profile.label} — Use of Allowed Limit", fontsize=11, pad=10)
    ax.set_xlabel("% of limit", fontsize=9)
    ax.tick_params(axis="both", labelsize=8)
    ax.grid(True, axis="x", alpha=0.25)

    plt.tight_layout()
    fig.savefig(out_path, bbox_inches="tight")
    plt.close(fig)
    return True
