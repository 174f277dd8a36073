import json
import os

import pytest

from hvacsim.appliances import DualFuelSystem, ElectricFurnace, GasFurnace, HeatPump
from hvacsim.config import build_appliance, load_scenarios

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

HP_DATA = {
    "description": "Test Heat Pump",
    "max_capacity": {"x_outdoor_f": [-10, 100], "y_btu_hr": [50000, 50000]},
    "cop": {"x_outdoor_f": [-10, 100], "y_cop": [3.0, 3.0]},
}


@pytest.fixture
def curves_file(tmp_path):
    path = tmp_path / "hp.json"
    path.write_text(json.dumps(HP_DATA))
    return path


def write_scenarios(tmp_path, scenarios, text=None):
    path = tmp_path / "scenarios.json"
    path.write_text(text if text is not None else json.dumps({"scenarios": scenarios}))
    return str(path)


def test_build_gas_furnace():
    furnace = build_appliance({"type": "gas_furnace", "afue_percent": 80, "capacity_btus_per_hour": 60000,
                               "elevation_feet": 5500})
    assert isinstance(furnace, GasFurnace)
    assert furnace.derated_capacity_btus_per_hour == pytest.approx(60000 * 0.8)


def test_build_electric_furnace():
    heater = build_appliance({"type": "electric_furnace", "capacity_btus_per_hour": 30000}, name="Baseboard")
    assert isinstance(heater, ElectricFurnace)
    assert heater.name == "Baseboard"
    assert heater.efficiency_percent == 100


def test_build_heat_pump_relative_path(curves_file, tmp_path):
    hp = build_appliance({"type": "heat_pump", "curves": "hp.json"}, base_dir=str(tmp_path))
    assert isinstance(hp, HeatPump)
    assert hp.name == "Test Heat Pump"


def test_build_heat_pump_inline_curves():
    hp = build_appliance({"type": "heat_pump", "curves": HP_DATA}, name="Inline")
    assert hp.name == "Inline"
    assert hp.get_max_heating_capacity(30) == pytest.approx(50000)


def test_build_dual_fuel_celsius_switchover(curves_file, tmp_path):
    system = build_appliance({
        "type": "dual_fuel",
        "switchover_temp_c": -16,
        "heat_pump": {"type": "heat_pump", "curves": "hp.json"},
        "auxiliary": {"type": "gas_furnace", "afue_percent": 96, "capacity_btus_per_hour": 80000},
    }, base_dir=str(tmp_path))
    assert isinstance(system, DualFuelSystem)
    assert system.switchover_temp_f == pytest.approx(3.2)
    assert isinstance(system.auxiliary, GasFurnace)


@pytest.mark.parametrize("spec,message", [
    ({"type": "wood_stove"}, "Unknown appliance type"),
    ({"afue_percent": 90}, "Unknown appliance type"),
    ({"type": "gas_furnace", "afue_percent": 90}, "capacity_btus_per_hour"),
    ({"type": "heat_pump"}, "curves"),
    ({"type": "heat_pump", "curves": "does_not_exist.json"}, "not found"),
    ({"type": "heat_pump", "curves": {"cop": HP_DATA["cop"]}}, "max_capacity"),
    ({"type": "dual_fuel", "heat_pump": {"type": "heat_pump", "curves": HP_DATA},
      "auxiliary": {"type": "electric_furnace", "capacity_btus_per_hour": 1000}}, "switchover"),
    ({"type": "dual_fuel", "switchover_temp_f": 0,
      "heat_pump": {"type": "electric_furnace", "capacity_btus_per_hour": 1000},
      "auxiliary": {"type": "electric_furnace", "capacity_btus_per_hour": 1000}}, "heat_pump"),
])
def test_invalid_appliances(spec, message):
    with pytest.raises(ValueError, match=message):
        build_appliance(spec)


def test_load_scenarios_in_order(tmp_path, curves_file):
    path = write_scenarios(tmp_path, [
        {"name": "HP", "appliance": {"type": "heat_pump", "curves": "hp.json"}},
        {"name": "Gas", "appliance": {"type": "gas_furnace", "afue_percent": 95,
                                       "capacity_btus_per_hour": 60000}},
    ])
    scenarios = load_scenarios(path)
    assert list(scenarios) == ["HP", "Gas"]
    assert scenarios["HP"].name == "HP"


def test_load_scenarios_with_comments(tmp_path):
    text = """{
        // Only one option for now
        "scenarios": [
            {"appliance": {"type": "electric_furnace", "capacity_btus_per_hour": 40000}}
        ]
    }"""
    scenarios = load_scenarios(write_scenarios(tmp_path, None, text=text))
    assert list(scenarios) == ["Scenario 1"]


@pytest.mark.parametrize("scenarios,message", [
    ([], "No scenarios"),
    ([{"name": "A"}], "no 'appliance'"),
    ([{"name": "A", "appliance": {"type": "electric_furnace", "capacity_btus_per_hour": 1}},
      {"name": "A", "appliance": {"type": "electric_furnace", "capacity_btus_per_hour": 1}}], "Duplicate"),
])
def test_invalid_scenario_files(tmp_path, scenarios, message):
    with pytest.raises(ValueError, match=message):
        load_scenarios(write_scenarios(tmp_path, scenarios))


def test_bundled_scenarios_load():
    scenarios = load_scenarios(os.path.join(REPO_ROOT, "data", "scenarios.json"))
    assert len(scenarios) == 4
    assert isinstance(scenarios["Gas Furnace"], GasFurnace)
    assert isinstance(scenarios["Heat Pump + Gas Backup"], DualFuelSystem)


@pytest.mark.parametrize("spec,message", [
    ({"type": "gas_furnace", "afue_percent": "96", "capacity_btus_per_hour": 80000}, "AFUE"),
    ({"type": "gas_furnace", "afue_percent": 96, "capacity_btus_per_hour": None}, "capacity"),
    ({"type": "gas_furnace", "afue_percent": 96, "capacity_btus_per_hour": 80000,
      "elevation_feet": "high"}, "Elevation"),
    ({"type": "electric_furnace", "capacity_btus_per_hour": 30000, "efficiency_percent": True}, "Efficiency"),
    ({"type": "heat_pump", "curves": 42}, "curves"),
    ({"type": "heat_pump", "curves": {"max_capacity": [1, 2], "cop": HP_DATA["cop"]}}, "malformed"),
    ({"type": "heat_pump", "curves": dict(HP_DATA, cop={"x_outdoor_f": [0, "50"], "y_cop": [2, 3]})},
     "numbers"),
    ({"type": "heat_pump", "curves": dict(HP_DATA, min_operating_temp_f="cold")}, "Minimum operating"),
    ({"type": "dual_fuel", "switchover_temp_c": "-16",
      "heat_pump": {"type": "heat_pump", "curves": HP_DATA},
      "auxiliary": {"type": "electric_furnace", "capacity_btus_per_hour": 1000}}, "switchover_temp_c"),
    ({"type": "dual_fuel", "switchover_temp_f": 10, "heat_pump": "hp.json",
      "auxiliary": {"type": "electric_furnace", "capacity_btus_per_hour": 1000}}, "JSON object"),
    ("gas_furnace", "JSON object"),
])
def test_badly_typed_appliances(spec, message):
    with pytest.raises(ValueError, match=message):
        build_appliance(spec)


@pytest.mark.parametrize("data,message", [
    ({"scenarios": ["gas"]}, "JSON object"),
    ({"scenarios": {"name": "Gas"}}, "must be a list"),
    ({"scenarios": [{"name": "Gas", "appliance": ["gas_furnace"]}]}, "JSON object"),
    ([{"name": "Gas"}], "No scenarios"),
])
def test_badly_shaped_scenario_files(tmp_path, data, message):
    path = tmp_path / "scenarios.json"
    path.write_text(json.dumps(data))
    with pytest.raises(ValueError, match=message):
        load_scenarios(str(path))
