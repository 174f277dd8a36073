"""
Scenario configuration.

A scenario file lists named appliance setups to compare:

    {
        "scenarios": [
            {"name": "Gas Furnace",
             "appliance": {"type": "gas_furnace", "afue_percent": 96,
                           "capacity_btus_per_hour": 80000, "elevation_feet": 250}},
            {"name": "Heat Pump",
             "appliance": {"type": "heat_pump", "curves": "heat_pump.json"}}
        ]
    }

Relative curve paths are resolved against the scenario file's directory.
"""
import logging
import os

from .appliances import DualFuelSystem, ElectricFurnace, GasFurnace, HeatPump
from .utils import celsius_to_fahrenheit, load_json

_LOGGER = logging.getLogger(__name__)


def _require(spec, key, kind):
    if key not in spec:
        raise ValueError(f"'{kind}' appliance is missing required key '{key}'")
    return spec[key]


def _build_gas_furnace(spec, name, base_dir):
    return GasFurnace(
        afue_percent=_require(spec, 'afue_percent', 'gas_furnace'),
        capacity_btus_per_hour=_require(spec, 'capacity_btus_per_hour', 'gas_furnace'),
        elevation_feet=spec.get('elevation_feet', 0.0),
        name=name or "Gas Furnace",
    )


def _build_electric_furnace(spec, name, base_dir):
    return ElectricFurnace(
        capacity_btus_per_hour=_require(spec, 'capacity_btus_per_hour', 'electric_furnace'),
        efficiency_percent=spec.get('efficiency_percent', 100.0),
        name=name or "Electric Furnace",
    )


def _build_heat_pump(spec, name, base_dir):
    curves = _require(spec, 'curves', 'heat_pump')
    if isinstance(curves, str):
        path = curves if os.path.isabs(curves) else os.path.join(base_dir, curves)
        if not os.path.exists(path):
            raise ValueError(f"Heat pump curve file '{path}' not found")
        curves = load_json(path)
    if not isinstance(curves, dict):
        raise ValueError("'heat_pump' curves must be a file path or an object")
    try:
        return HeatPump.from_dict(curves, name=name)
    except KeyError as e:
        raise ValueError(f"Heat pump curves are missing {e}") from e
    except TypeError as e:
        raise ValueError(f"Heat pump curves are malformed: {e}") from e


def _build_dual_fuel(spec, name, base_dir):
    heat_pump = build_appliance(_require(spec, 'heat_pump', 'dual_fuel'), base_dir=base_dir)
    if not isinstance(heat_pump, HeatPump):
        raise ValueError("'dual_fuel' heat_pump must be of type 'heat_pump'")
    auxiliary = build_appliance(_require(spec, 'auxiliary', 'dual_fuel'), base_dir=base_dir)

    key = next((k for k in ('switchover_temp_f', 'switchover_temp_c') if k in spec), None)
    if key is None:
        raise ValueError("'dual_fuel' appliance needs 'switchover_temp_f' or 'switchover_temp_c'")
    switchover = spec[key]
    if not isinstance(switchover, (int, float)) or isinstance(switchover, bool):
        raise ValueError(f"'dual_fuel' {key} must be a number, got {switchover!r}")
    switchover_f = switchover if key == 'switchover_temp_f' else celsius_to_fahrenheit(switchover)

    return DualFuelSystem(heat_pump, auxiliary, switchover_f, name=name or "Heat Pump + Auxiliary")


APPLIANCE_BUILDERS = {
    'gas_furnace': _build_gas_furnace,
    'electric_furnace': _build_electric_furnace,
    'heat_pump': _build_heat_pump,
    'dual_fuel': _build_dual_fuel,
}


def build_appliance(spec: dict, name=None, base_dir="."):
    if not isinstance(spec, dict):
        raise ValueError(f"Appliance must be a JSON object, got {spec!r}")
    kind = spec.get('type')
    builder = APPLIANCE_BUILDERS.get(kind)
    if builder is None:
        raise ValueError(f"Unknown appliance type {kind!r}. "
                         f"Expected one of: {', '.join(APPLIANCE_BUILDERS)}")
    return builder(spec, name, base_dir)


def load_scenarios(json_path) -> dict:
    """Returns {scenario name: appliance}, in file order."""
    data = load_json(json_path)
    base_dir = os.path.dirname(os.path.abspath(json_path))

    entries = data.get('scenarios') if isinstance(data, dict) else None
    if not entries:
        raise ValueError(f"No scenarios defined in {json_path}")
    if not isinstance(entries, list):
        raise ValueError(f"'scenarios' in {json_path} must be a list")

    scenarios = {}
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ValueError(f"Scenario {i + 1} must be a JSON object, got {entry!r}")
        name = entry.get('name') or f"Scenario {i + 1}"
        if name in scenarios:
            raise ValueError(f"Duplicate scenario name '{name}'")
        if 'appliance' not in entry:
            raise ValueError(f"Scenario '{name}' has no 'appliance'")
        scenarios[name] = build_appliance(entry['appliance'], name=name, base_dir=base_dir)

    _LOGGER.debug("Loaded %d scenarios from %s", len(scenarios), json_path)
    return scenarios
