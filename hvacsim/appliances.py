"""
Appliance thermal-response models.

Every appliance answers the same question: given a signed demand
(positive = heat requested, negative = cooling requested) and the current
indoor/outdoor temperatures, how much heat does it actually move and what
fuel does that burn?
"""
import logging
import math
import numbers
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional

from .constants import (
    BTU_PER_CCF_NATURAL_GAS,
    BTU_PER_KWH,
    ELECTRICITY_KWH_PER_HOUR,
    ELEVATION_DERATE_PER_1000_FEET,
    ELEVATION_DERATE_THRESHOLD_FEET,
    NATURAL_GAS_CCF_PER_HOUR,
)
from .interpolate import interpolate_curve
from .utils import load_json

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class HVACApplianceResponse:
    btus_per_hour: float
    # Only carriers the appliance actually uses appear here
    fuel_usage: Dict[str, float] = field(default_factory=dict)


def off_response() -> HVACApplianceResponse:
    """Zero output and no fuel carriers at all."""
    return HVACApplianceResponse(btus_per_hour=0.0, fuel_usage={})


class HVACAppliance(ABC):
    name = "appliance"

    @abstractmethod
    def get_thermal_response(self, btus_per_hour_needed: float, inside_air_temp_f: float,
                             outside_air_temp_f: float) -> HVACApplianceResponse:
        """Responds to a signed demand in BTU/hr (heating > 0, cooling < 0)."""


def elevation_capacity_multiplier(elevation_feet: float) -> float:
    """
    Gas appliances above 2,000 ft lose 4% of capacity per *whole* 1,000 ft of
    elevation. 2,999 ft derates the same as 2,001 ft.
    """
    if elevation_feet > ELEVATION_DERATE_THRESHOLD_FEET:
        return 1.0 - math.floor(elevation_feet / 1000.0) * ELEVATION_DERATE_PER_1000_FEET
    return 1.0


def _is_number(value):
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _require_number(value, label):
    if not _is_number(value):
        raise ValueError(f"{label} must be a number, got {value!r}")


def _require_positive(value, label):
    if not _is_number(value) or not value > 0:
        raise ValueError(f"{label} must be positive, got {value!r}")


def _require_percent(value, label):
    if not _is_number(value) or not 0 < value <= 100:
        raise ValueError(f"{label} must be in (0, 100], got {value!r}")


class GasFurnace(HVACAppliance):
    """Natural gas furnace. Heats only; efficiency does not depend on conditions."""

    def __init__(self, afue_percent: float, capacity_btus_per_hour: float, elevation_feet: float = 0.0,
                 name: str = "Gas Furnace"):
        """
        Args:
            afue_percent: Annual Fuel Utilization Efficiency, typically 96-98%
                for modern furnaces and around 80% for older ones.
            capacity_btus_per_hour: rated output at sea level.
            elevation_feet: installation altitude.
        """
        _require_percent(afue_percent, "AFUE")
        _require_positive(capacity_btus_per_hour, "Furnace capacity")
        _require_number(elevation_feet, "Elevation")
        if afue_percent < 50:
            _LOGGER.warning("AFUE of %.1f%% is unusually low for a gas furnace", afue_percent)

        self.name = name
        self.afue_percent = afue_percent
        self.capacity_btus_per_hour = capacity_btus_per_hour
        self.elevation_feet = elevation_feet
        self.derated_capacity_btus_per_hour = capacity_btus_per_hour * elevation_capacity_multiplier(elevation_feet)

    def get_thermal_response(self, btus_per_hour_needed, inside_air_temp_f, outside_air_temp_f):
        if btus_per_hour_needed < 0:
            # Furnaces can't cool
            return off_response()

        btus_per_hour = min(btus_per_hour_needed, self.derated_capacity_btus_per_hour)
        btu_consumption_rate = btus_per_hour / (self.afue_percent / 100.0)

        return HVACApplianceResponse(
            btus_per_hour=btus_per_hour,
            fuel_usage={NATURAL_GAS_CCF_PER_HOUR: btu_consumption_rate / BTU_PER_CCF_NATURAL_GAS},
        )


class ElectricFurnace(HVACAppliance):
    """Electric resistance heat (furnace or baseboard). No elevation derating."""

    def __init__(self, capacity_btus_per_hour: float, efficiency_percent: float = 100.0,
                 name: str = "Electric Furnace"):
        _require_positive(capacity_btus_per_hour, "Electric furnace capacity")
        _require_percent(efficiency_percent, "Efficiency")
        self.name = name
        self.capacity_btus_per_hour = capacity_btus_per_hour
        self.efficiency_percent = efficiency_percent

    def get_thermal_response(self, btus_per_hour_needed, inside_air_temp_f, outside_air_temp_f):
        if btus_per_hour_needed < 0:
            return off_response()

        btus_per_hour = min(btus_per_hour_needed, self.capacity_btus_per_hour)
        kwh_per_hour = btus_per_hour / (self.efficiency_percent / 100.0) / BTU_PER_KWH

        return HVACApplianceResponse(
            btus_per_hour=btus_per_hour,
            fuel_usage={ELECTRICITY_KWH_PER_HOUR: kwh_per_hour},
        )


class PerformanceCurve:
    """Piecewise-linear value vs outdoor temperature (F), clamped at the ends."""

    def __init__(self, x_outdoor_f, y_values, label="curve"):
        if not isinstance(x_outdoor_f, (list, tuple)) or not isinstance(y_values, (list, tuple)):
            raise ValueError(f"{label}: x and y points must be lists")
        if not all(_is_number(v) for v in list(x_outdoor_f) + list(y_values)):
            raise ValueError(f"{label}: x and y points must be numbers")
        if len(x_outdoor_f) == 0 or len(x_outdoor_f) != len(y_values):
            raise ValueError(f"{label}: x and y points must be non-empty and the same length")
        if any(b <= a for a, b in zip(x_outdoor_f, x_outdoor_f[1:])):
            raise ValueError(f"{label}: outdoor temperatures must be strictly increasing")
        self.x = [float(v) for v in x_outdoor_f]
        self.y = [float(v) for v in y_values]
        self.label = label

    def __call__(self, t_out):
        return interpolate_curve(t_out, self.x, self.y)


class HeatPump(HVACAppliance):
    """
    Air-source heat pump. Capacity and COP both fall as the outdoor temperature
    drops, so both are looked up on curves taken from the manufacturer's
    engineering data.
    """

    def __init__(self, heating_capacity: PerformanceCurve, heating_cop: PerformanceCurve,
                 cooling_capacity: Optional[PerformanceCurve] = None,
                 cooling_cop: Optional[PerformanceCurve] = None,
                 min_operating_temp_f: Optional[float] = None,
                 name: str = "Heat Pump"):
        for cop in (heating_cop, cooling_cop):
            if cop is not None and min(cop.y) <= 0:
                raise ValueError(f"{cop.label}: COP values must be positive")
        for cap in (heating_capacity, cooling_capacity):
            if cap is not None and min(cap.y) < 0:
                raise ValueError(f"{cap.label}: capacity values must be nonnegative")

        self.name = name
        self.heating_capacity = heating_capacity
        self.heating_cop = heating_cop
        self.cooling_capacity = cooling_capacity
        if cooling_capacity is not None and cooling_cop is None:
            _LOGGER.info("No cooling COP curve for %s. Using heating COP curve for cooling.", name)
            cooling_cop = heating_cop
        self.cooling_cop = cooling_cop
        if min_operating_temp_f is not None:
            _require_number(min_operating_temp_f, "Minimum operating temperature")
        self.min_operating_temp_f = min_operating_temp_f

    @classmethod
    def from_dict(cls, data: dict, name: Optional[str] = None):
        heating_capacity = PerformanceCurve(data['max_capacity']['x_outdoor_f'],
                                            data['max_capacity']['y_btu_hr'], "max_capacity")
        heating_cop = PerformanceCurve(data['cop']['x_outdoor_f'], data['cop']['y_cop'], "cop")

        cooling_capacity = None
        if 'cooling_capacity' in data:
            cooling_capacity = PerformanceCurve(data['cooling_capacity']['x_outdoor_f'],
                                                data['cooling_capacity']['y_btu_hr'], "cooling_capacity")
        elif 'max_cool_btu_hr' in data:
            # Flat cooling capacity
            cooling_capacity = PerformanceCurve([0.0], [data['max_cool_btu_hr']], "max_cool_btu_hr")

        cooling_cop = None
        if 'cooling_cop' in data:
            cooling_cop = PerformanceCurve(data['cooling_cop']['x_outdoor_f'],
                                           data['cooling_cop']['y_cop'], "cooling_cop")

        return cls(
            heating_capacity,
            heating_cop,
            cooling_capacity=cooling_capacity,
            cooling_cop=cooling_cop,
            min_operating_temp_f=data.get('min_operating_temp_f'),
            name=name or data.get('description', "Heat Pump"),
        )

    @classmethod
    def from_json(cls, json_path, name: Optional[str] = None):
        return cls.from_dict(load_json(json_path), name=name)

    def get_max_heating_capacity(self, outside_air_temp_f):
        if self.min_operating_temp_f is not None and outside_air_temp_f < self.min_operating_temp_f:
            return 0.0
        return self.heating_capacity(outside_air_temp_f)

    def get_thermal_response(self, btus_per_hour_needed, inside_air_temp_f, outside_air_temp_f):
        if btus_per_hour_needed >= 0:
            max_capacity = self.get_max_heating_capacity(outside_air_temp_f)
            btus_per_hour = min(btus_per_hour_needed, max_capacity)
            cop = self.heating_cop(outside_air_temp_f)
        else:
            if self.cooling_capacity is None:
                return off_response()
            max_capacity = self.cooling_capacity(outside_air_temp_f)
            btus_per_hour = -min(-btus_per_hour_needed, max_capacity)
            cop = self.cooling_cop(outside_air_temp_f)

        if btus_per_hour == 0:
            return HVACApplianceResponse(btus_per_hour=0.0, fuel_usage={ELECTRICITY_KWH_PER_HOUR: 0.0})

        kwh_per_hour = abs(btus_per_hour) / cop / BTU_PER_KWH
        return HVACApplianceResponse(
            btus_per_hour=btus_per_hour,
            fuel_usage={ELECTRICITY_KWH_PER_HOUR: kwh_per_hour},
        )


def merge_fuel_usage(*usages) -> Dict[str, float]:
    merged = {}
    for usage in usages:
        for carrier, rate in usage.items():
            merged[carrier] = merged.get(carrier, 0.0) + rate
    return merged


class DualFuelSystem(HVACAppliance):
    """
    Heat pump with an auxiliary heater (gas or electric resistance).

    Below the switchover temperature only the auxiliary heats. Above it the
    heat pump runs first and the auxiliary covers whatever it can't.
    """

    def __init__(self, heat_pump: HeatPump, auxiliary: HVACAppliance, switchover_temp_f: float,
                 name: str = "Heat Pump + Auxiliary"):
        self.name = name
        self.heat_pump = heat_pump
        self.auxiliary = auxiliary
        self.switchover_temp_f = switchover_temp_f

    def get_thermal_response(self, btus_per_hour_needed, inside_air_temp_f, outside_air_temp_f):
        if btus_per_hour_needed < 0:
            return self.heat_pump.get_thermal_response(btus_per_hour_needed, inside_air_temp_f,
                                                       outside_air_temp_f)

        if outside_air_temp_f < self.switchover_temp_f:
            return self.auxiliary.get_thermal_response(btus_per_hour_needed, inside_air_temp_f,
                                                       outside_air_temp_f)

        primary = self.heat_pump.get_thermal_response(btus_per_hour_needed, inside_air_temp_f,
                                                      outside_air_temp_f)
        shortfall = btus_per_hour_needed - primary.btus_per_hour
        if shortfall <= 0:
            return primary

        backup = self.auxiliary.get_thermal_response(shortfall, inside_air_temp_f, outside_air_temp_f)
        if primary.btus_per_hour == 0:
            # Heat pump locked out or at zero capacity
            return backup
        return HVACApplianceResponse(
            btus_per_hour=primary.btus_per_hour + backup.btus_per_hour,
            fuel_usage=merge_fuel_usage(primary.fuel_usage, backup.fuel_usage),
        )
