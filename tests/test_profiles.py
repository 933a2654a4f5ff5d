import dataclasses

import pytest

from bus_checker.profiles.registry import (
    PROFILES,
    BusProfile,
    ProfileNotFoundError,
    get_profile,
    list_profiles,
)


def test_known_profiles():
    dc = get_profile("28vdc")
    ac = get_profile("115vac400")

    assert dc.steady_voltage_range == (22, 29)
    assert dc.has_frequency is False
    assert dc.frequency_range is None

    assert ac.steady_voltage_range == (108, 118)
    assert ac.has_frequency is True
    assert ac.frequency_range == (395, 405)
    assert ac.nominal_voltage == 115


def test_list_profiles_keeps_registry_order():
    assert [p.id for p in list_profiles()] == ["28vdc", "115vac400"]


@pytest.mark.parametrize("bus_type", ["28VDC", " 28vdc", "115vac", "", "270vdc"])
def test_lookup_is_exact_match(bus_type):
    with pytest.raises(ProfileNotFoundError) as exc:
        get_profile(bus_type)
    assert exc.value.bus_type == bus_type
    assert "28vdc" in str(exc.value)


def test_not_found_is_a_key_error():
    with pytest.raises(KeyError):
        get_profile("400hz")


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        PROFILES["new"] = PROFILES["28vdc"]  # type: ignore[index]

    with pytest.raises(dataclasses.FrozenInstanceError):
        get_profile("28vdc").ripple_percent_max = 50  # type: ignore[misc]


def test_profile_is_hashable_value_object():
    p = get_profile("28vdc")
    assert p == dataclasses.replace(p)
    assert isinstance(p, BusProfile)
    assert {p: 1}[p] == 1
