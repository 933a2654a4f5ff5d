from pathlib import Path

from streamlit.testing.v1 import AppTest


UI_SCRIPT = str(Path(__file__).resolve().parents[1] / "bus_checker" / "app" / "ui.py")
TIMEOUT = 60


def _app() -> AppTest:
    at = AppTest.from_file(UI_SCRIPT, default_timeout=TIMEOUT)
    return at.run()


def _button(at: AppTest, label: str):
    return next(b for b in at.button if b.label == label)


def _markdown(at: AppTest) -> str:
    return "\n".join(m.value for m in at.markdown)


def test_starts_idle_on_default_bus():
    at = _app()
    assert not at.exception
    assert at.selectbox(key="bus_type").value == "28vdc"
    assert "Awaiting input" in _markdown(at)
    # DC bus has no frequency input
    assert "field__steady_frequency" not in [t.key for t in at.text_input]


def test_dc_run_passes():
    at = _app()
    values = {
        "steady_voltage": "27.8",
        "ripple": "3",
        "uv_dip_percent": "10",
        "uv_dip_duration": "20",
        "ov_surge_percent": "10",
        "ov_surge_duration": "20",
    }
    for name, value in values.items():
        at.text_input(key=f"field__{name}").input(value)
    _button(at, "Run compliance check").click().run()

    assert not at.exception
    md = _markdown(at)
    assert "PASS (Demo)" in md
    assert "Out of limit" not in md


def test_ac_bus_shows_frequency_and_flags_missing_values():
    at = _app()
    at.selectbox(key="bus_type").select("115vac400").run()
    assert "field__steady_frequency" in [t.key for t in at.text_input]

    _button(at, "Run compliance check").click().run()
    md = _markdown(at)
    assert "NOT COMPLIANT (Demo)" in md
    assert "No measured frequency provided for AC bus." in md


def test_reset_returns_to_idle():
    at = _app()
    at.text_input(key="field__steady_voltage").input("27.8")
    _button(at, "Run compliance check").click().run()
    assert "NOT COMPLIANT (Demo)" in _markdown(at)

    _button(at, "Reset").click().run()
    assert "Awaiting input" in _markdown(at)
    assert at.text_input(key="field__steady_voltage").value == ""
