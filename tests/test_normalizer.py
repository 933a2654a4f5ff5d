import pytest

from bus_checker.checks.evaluator import Measurement
from bus_checker.ingest.normalizer import MEASUREMENT_FIELDS, normalize_measurement, parse_number


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("27.8", 27.8),
        ("  113.5 ", 113.5),
        ("0", 0.0),
        ("-3", -3.0),
        ("1e2", 100.0),
        (42, 42.0),
        (4.5, 4.5),
    ],
)
def test_parse_number_accepts_numbers(raw, expected):
    assert parse_number(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [None, "", "   ", "abc", "12 V", "nan", "inf", "-Infinity", float("nan"), float("inf"), True, False, "1e400"],
)
def test_parse_number_not_provided(raw):
    assert parse_number(raw) is None


def test_normalize_from_form_ids():
    m = normalize_measurement(
        {
            "steadyVoltage": "27.8",
            "steadyFrequency": "",
            "ripple": "3",
            "uvDipPercent": "10",
            "uvDipDuration": "20",
            "ovSurgePercent": "ten",
            "ovSurgeDuration": "20",
        }
    )
    assert m == Measurement(
        steady_voltage=27.8,
        steady_frequency=None,
        ripple=3.0,
        uv_dip_percent=10.0,
        uv_dip_duration=20.0,
        ov_surge_percent=None,
        ov_surge_duration=20.0,
    )


def test_normalize_from_attribute_names_and_missing_keys():
    m = normalize_measurement({"steady_voltage": 115, "ripple": None})
    assert m.steady_voltage == 115.0
    assert m.ripple is None
    assert m.uv_dip_percent is None
    assert normalize_measurement({}) == Measurement()


def test_measurement_fields_cover_the_model():
    names = [f.name for f in MEASUREMENT_FIELDS]
    assert names == list(Measurement.__dataclass_fields__)
    assert len({f.form_id for f in MEASUREMENT_FIELDS}) == len(names)
