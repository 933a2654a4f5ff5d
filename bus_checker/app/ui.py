from __future__ import annotations

import sys
import tempfile
from pathlib import Path

import streamlit as st

# -------------------------------------------------
# Ensure project root importable (local reliability)
# -------------------------------------------------
ROOT_DIR = Path(__file__).resolve().parents[2]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from bus_checker.checks.evaluator import evaluate_compliance  # noqa: E402
from bus_checker.config import settings  # noqa: E402
from bus_checker.ingest.normalizer import MEASUREMENT_FIELDS, normalize_measurement  # noqa: E402
from bus_checker.main import write_report  # noqa: E402
from bus_checker.profiles.registry import ProfileNotFoundError, get_profile, list_profiles  # noqa: E402
from bus_checker.report.view import (  # noqa: E402
    DISCLAIMER,
    EMPTY_CHECKLIST,
    IDLE_STATUS,
    check_pill,
    overall_status,
    summary_rows,
    voltage_input_unit,
)

# -------------------------------------------------
# Page config + styling
# -------------------------------------------------
st.set_page_config(page_title=settings.app_title, layout="centered")

CUSTOM_CSS = """
<style>
.block-container {padding-top: 2.0rem; padding-bottom: 2.0rem; max-width: 980px;}
h1 {letter-spacing: -0.02em;}

.stButton > button, .stDownloadButton > button, .stFormSubmitButton > button {
  border-radius: 14px !important;
  font-weight: 650 !important;
}

.bc-status {
  border-radius: 18px;
  padding: 16px 18px;
  border: 1px solid rgba(255,255,255,0.10);
  background: rgba(255,255,255,0.03);
  display: flex; justify-content: space-between; align-items: center;
}
.bc-status--pass {border-color: rgba(46,125,50,0.80);}
.bc-status--fail {border-color: rgba(198,40,40,0.80);}

.bc-pill {border-radius: 999px; padding: 4px 12px; font-weight: 700; font-size: 0.85rem;}
.bc-pill--idle {background: rgba(255,255,255,0.10);}
.bc-pill--pass {background: #2E7D32; color: #fff;}
.bc-pill--fail {background: #C62828; color: #fff;}

.bc-check {display: flex; justify-content: space-between; align-items: center; padding: 10px 0;
  border-bottom: 1px solid rgba(255,255,255,0.08);}
.bc-check__label {font-weight: 700;}
.bc-check__detail {opacity: 0.80; font-size: 0.9rem;}
</style>
"""
st.markdown(CUSTOM_CSS, unsafe_allow_html=True)

PROFILES = list_profiles()
PROFILE_IDS = [p.id for p in PROFILES]
FIELD_KEYS = [f"field__{f.name}" for f in MEASUREMENT_FIELDS]

st.session_state.setdefault("bus_type", settings.default_bus_type)
st.session_state.setdefault("last_run", None)


def _reset():
    for key in FIELD_KEYS:
        st.session_state[key] = ""
    st.session_state["bus_type"] = settings.default_bus_type
    st.session_state["last_run"] = None


def _status_html(state: str, label: str, pill: str) -> str:
    return (
        f'<div class="bc-status bc-status--{state}">'
        f"<span>{label}</span>"
        f'<span class="bc-pill bc-pill--{state}">{pill}</span>'
        "</div>"
    )


# -------------------------------------------------
# Header
# -------------------------------------------------
st.title(f"⚡ {settings.app_title}")
st.caption("Power quality compliance check against simplified, illustrative bus limits.")

# -------------------------------------------------
# Bus selection (outside the form so AC-only inputs toggle immediately)
# -------------------------------------------------
bus_type = st.selectbox(
    "Bus type",
    PROFILE_IDS,
    key="bus_type",
    format_func=lambda pid: get_profile(pid).label,
)

try:
    profile = get_profile(bus_type)
except ProfileNotFoundError as e:
    st.error(str(e))
    st.stop()

# -------------------------------------------------
# Measurement inputs
# -------------------------------------------------
with st.form("checker-form"):
    raw: dict[str, str] = {}
    for f, key in zip(MEASUREMENT_FIELDS, FIELD_KEYS):
        if f.name == "steady_frequency" and not profile.has_frequency:
            continue

        if f.name == "steady_voltage":
            label = f"{f.label} ({voltage_input_unit(profile)})"
            hint = profile.input_hint or None
        elif f.name == "ripple":
            label = f"{'AC distortion / THD' if profile.has_frequency else 'DC ripple'} ({f.unit})"
            hint = None
        else:
            label = f"{f.label} ({f.unit})"
            hint = None

        st.session_state.setdefault(key, "")
        raw[f.name] = st.text_input(label, key=key, help=hint, placeholder="Not provided")

    submitted = st.form_submit_button("Run compliance check", use_container_width=True)

st.button("Reset", on_click=_reset)

if submitted:
    measurement = normalize_measurement(raw)
    report = evaluate_compliance(profile, measurement)
    st.session_state["last_run"] = (profile.id, measurement, report)

# -------------------------------------------------
# Results
# -------------------------------------------------
st.subheader("Results")

last_run = st.session_state.get("last_run")
if last_run is None or last_run[0] != profile.id:
    st.markdown(_status_html(IDLE_STATUS.state, IDLE_STATUS.label, IDLE_STATUS.pill), unsafe_allow_html=True)
    st.caption(EMPTY_CHECKLIST)
else:
    _, measurement, report = last_run
    status = overall_status(report)
    st.markdown(_status_html(status.state, status.label, status.pill), unsafe_allow_html=True)

    for c in report.checks:
        state = "pass" if c.passed else "fail"
        st.markdown(
            f'<div class="bc-check"><div><div class="bc-check__label">{c.label}</div>'
            f'<div class="bc-check__detail">{c.detail}</div></div>'
            f'<span class="bc-pill bc-pill--{state}">{check_pill(c)}</span></div>',
            unsafe_allow_html=True,
        )

    with st.expander("Measurement summary", expanded=True):
        for name, value in summary_rows(profile, measurement):
            st.markdown(f"**{name}:** {value}")

    try:
        with tempfile.TemporaryDirectory() as tmp:
            pdf_path = write_report(profile, measurement, report, str(Path(tmp) / "bus_check_report.pdf"))
            pdf_bytes = Path(pdf_path).read_bytes()
    except OSError as e:
        st.error(f"Report failed to generate: {e}")
    else:
        st.download_button(
            "⬇️ Download printable report",
            data=pdf_bytes,
            file_name=f"bus_check_{profile.id}.pdf",
            mime="application/pdf",
            use_container_width=True,
        )

st.markdown("---")
st.caption(DISCLAIMER)
