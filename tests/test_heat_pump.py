import json

import pytest

from hvacsim.appliances import (
    DualFuelSystem,
    ElectricFurnace,
    GasFurnace,
    HeatPump,
    PerformanceCurve,
    merge_fuel_usage,
)
from hvacsim.constants import (
    BTU_PER_CCF_NATURAL_GAS,
    BTU_PER_KWH,
    ELECTRICITY_KWH_PER_HOUR,
    NATURAL_GAS_CCF_PER_HOUR,
)

HP_DATA = {
    "description": "Test Heat Pump",
    "max_capacity": {"x_outdoor_f": [0, 50], "y_btu_hr": [20000, 40000]},
    "cop": {"x_outdoor_f": [0, 50], "y_cop": [2.0, 4.0]},
}


@pytest.fixture
def heat_pump():
    return HeatPump.from_dict(HP_DATA)


@pytest.fixture
def cooling_heat_pump():
    data = dict(HP_DATA)
    data["cooling_capacity"] = {"x_outdoor_f": [70, 100], "y_btu_hr": [30000, 24000]}
    return HeatPump.from_dict(data)


def test_capacity_and_cop_follow_curves(heat_pump):
    response = heat_pump.get_thermal_response(15000, 68, 25)
    assert response.btus_per_hour == pytest.approx(15000)
    # COP at 25F is 3.0
    assert response.fuel_usage == {ELECTRICITY_KWH_PER_HOUR: pytest.approx(15000 / 3.0 / BTU_PER_KWH)}


def test_capacity_limited(heat_pump):
    response = heat_pump.get_thermal_response(50000, 68, 25)
    assert response.btus_per_hour == pytest.approx(30000)


def test_curves_clamp_below_range(heat_pump):
    response = heat_pump.get_thermal_response(50000, 68, -20)
    assert response.btus_per_hour == pytest.approx(20000)
    assert response.fuel_usage[ELECTRICITY_KWH_PER_HOUR] == pytest.approx(20000 / 2.0 / BTU_PER_KWH)


def test_efficiency_depends_on_outdoor_temp(heat_pump):
    cold = heat_pump.get_thermal_response(10000, 68, 0)
    mild = heat_pump.get_thermal_response(10000, 68, 50)
    assert cold.fuel_usage[ELECTRICITY_KWH_PER_HOUR] == pytest.approx(
        2 * mild.fuel_usage[ELECTRICITY_KWH_PER_HOUR])


def test_no_cooling_curve_means_no_cooling(heat_pump):
    response = heat_pump.get_thermal_response(-10000, 75, 95)
    assert response.btus_per_hour == 0
    assert response.fuel_usage == {}


def test_cooling_output_is_negative_and_capped(cooling_heat_pump):
    response = cooling_heat_pump.get_thermal_response(-40000, 75, 100)
    assert response.btus_per_hour == pytest.approx(-24000)
    # Cooling COP falls back to the heating curve (clamped to 4.0)
    assert response.fuel_usage[ELECTRICITY_KWH_PER_HOUR] == pytest.approx(24000 / 4.0 / BTU_PER_KWH)

    partial = cooling_heat_pump.get_thermal_response(-10000, 75, 85)
    assert partial.btus_per_hour == pytest.approx(-10000)


def test_flat_max_cool(heat_pump):
    data = dict(HP_DATA, max_cool_btu_hr=18000,
                cooling_cop={"x_outdoor_f": [80, 100], "y_cop": [4.0, 3.0]})
    hp = HeatPump.from_dict(data)
    response = hp.get_thermal_response(-50000, 75, 90)
    assert response.btus_per_hour == pytest.approx(-18000)
    assert response.fuel_usage[ELECTRICITY_KWH_PER_HOUR] == pytest.approx(18000 / 3.5 / BTU_PER_KWH)


def test_min_operating_temp_locks_out():
    hp = HeatPump.from_dict(dict(HP_DATA, min_operating_temp_f=0))
    response = hp.get_thermal_response(10000, 68, -5)
    assert response.btus_per_hour == 0
    assert response.fuel_usage == {ELECTRICITY_KWH_PER_HOUR: 0.0}

    assert hp.get_thermal_response(10000, 68, 0).btus_per_hour == pytest.approx(10000)


def test_from_json_with_comments(tmp_path):
    path = tmp_path / "hp.json"
    path.write_text("// Test unit\n" + json.dumps(HP_DATA))
    hp = HeatPump.from_json(path)
    assert hp.name == "Test Heat Pump"
    assert hp.get_thermal_response(100000, 68, 50).btus_per_hour == pytest.approx(40000)


@pytest.mark.parametrize(
    "x,y",
    [
        ([], []),
        ([0, 10], [1.0]),
        ([10, 0], [1.0, 2.0]),
        ([0, 0], [1.0, 2.0]),
    ],
)
def test_invalid_curves(x, y):
    with pytest.raises(ValueError):
        PerformanceCurve(x, y)


def test_non_positive_cop_rejected():
    with pytest.raises(ValueError, match="COP"):
        HeatPump.from_dict(dict(HP_DATA, cop={"x_outdoor_f": [0, 50], "y_cop": [0.0, 3.0]}))


# --- Dual Fuel ---

@pytest.fixture
def dual_fuel(heat_pump):
    furnace = GasFurnace(afue_percent=100, capacity_btus_per_hour=100000)
    return DualFuelSystem(heat_pump, furnace, switchover_temp_f=10)


def test_dual_fuel_below_switchover_uses_auxiliary_only(dual_fuel):
    response = dual_fuel.get_thermal_response(20000, 68, 5)
    assert response.btus_per_hour == pytest.approx(20000)
    assert list(response.fuel_usage) == [NATURAL_GAS_CCF_PER_HOUR]


def test_dual_fuel_heat_pump_covers_load(dual_fuel):
    response = dual_fuel.get_thermal_response(20000, 68, 25)
    assert response.btus_per_hour == pytest.approx(20000)
    assert list(response.fuel_usage) == [ELECTRICITY_KWH_PER_HOUR]


def test_dual_fuel_auxiliary_covers_shortfall(dual_fuel):
    response = dual_fuel.get_thermal_response(50000, 68, 25)
    assert response.btus_per_hour == pytest.approx(50000)
    assert response.fuel_usage[ELECTRICITY_KWH_PER_HOUR] == pytest.approx(30000 / 3.0 / BTU_PER_KWH)
    assert response.fuel_usage[NATURAL_GAS_CCF_PER_HOUR] == pytest.approx(20000 / BTU_PER_CCF_NATURAL_GAS)


def test_dual_fuel_cooling_goes_to_heat_pump(cooling_heat_pump):
    system = DualFuelSystem(cooling_heat_pump, GasFurnace(96, 80000), switchover_temp_f=10)
    response = system.get_thermal_response(-10000, 75, 85)
    assert response.btus_per_hour == pytest.approx(-10000)
    assert list(response.fuel_usage) == [ELECTRICITY_KWH_PER_HOUR]


def test_dual_fuel_locked_out_heat_pump():
    hp = HeatPump.from_dict(dict(HP_DATA, min_operating_temp_f=20))
    system = DualFuelSystem(hp, ElectricFurnace(capacity_btus_per_hour=30000), switchover_temp_f=0)
    response = system.get_thermal_response(10000, 68, 10)
    assert response.btus_per_hour == pytest.approx(10000)
    assert response.fuel_usage == {ELECTRICITY_KWH_PER_HOUR: pytest.approx(10000 / BTU_PER_KWH)}


def test_dual_fuel_total_capped(dual_fuel):
    response = dual_fuel.get_thermal_response(1e6, 68, 25)
    assert response.btus_per_hour == pytest.approx(30000 + 100000)


def test_merge_fuel_usage():
    merged = merge_fuel_usage({"a": 1.0}, {"a": 2.0, "b": 0.5}, {})
    assert merged == {"a": 3.0, "b": 0.5}
