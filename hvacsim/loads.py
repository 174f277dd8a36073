"""
Steady-state building load model.

Turns outdoor conditions into the signed demand an appliance is asked to meet.
There is no thermal mass here: every step is evaluated as if the house were
already sitting at its setpoint.
"""
from dataclasses import dataclass

from .constants import (
    DEFAULT_COOLING_SETPOINT_C,
    DEFAULT_HEATING_SETPOINT_C,
    DEFAULT_INTERNAL_GAINS,
    DEFAULT_SOLAR_GAIN_FACTOR,
    DEFAULT_UA_PER_SQ_FT,
)
from .utils import celsius_to_fahrenheit
from .weather import WeatherSnapshot


@dataclass(frozen=True)
class BuildingLoadModel:
    ua_btu_per_hour_f: float                 # Envelope leakage (BTU/hr/F)
    solar_gain_factor: float = DEFAULT_SOLAR_GAIN_FACTOR   # BTU/hr per W/m^2
    internal_gains_btu_per_hour: float = DEFAULT_INTERNAL_GAINS
    heating_setpoint_f: float = celsius_to_fahrenheit(DEFAULT_HEATING_SETPOINT_C)
    cooling_setpoint_f: float = celsius_to_fahrenheit(DEFAULT_COOLING_SETPOINT_C)

    def __post_init__(self):
        if self.ua_btu_per_hour_f <= 0:
            raise ValueError(f"UA must be positive, got {self.ua_btu_per_hour_f!r}")
        if self.cooling_setpoint_f < self.heating_setpoint_f:
            raise ValueError("Cooling setpoint must not be below the heating setpoint")

    @classmethod
    def from_floor_area(cls, floor_area_sq_ft: float, **kwargs):
        """Rough UA estimate from conditioned floor space."""
        return cls(ua_btu_per_hour_f=floor_area_sq_ft * DEFAULT_UA_PER_SQ_FT, **kwargs)

    def get_demand(self, weather: WeatherSnapshot):
        """
        Returns (btus_per_hour_needed, inside_air_temp_f).
        Positive demand is heating, negative is cooling.
        """
        t_out = weather.outside_air_temp_f
        q_solar = self.solar_gain_factor * weather.solar_irradiance.watts_per_square_meter
        q_free = q_solar + self.internal_gains_btu_per_hour

        # Heat escaping through the envelope at the heating setpoint, minus free gains
        heating_load = self.ua_btu_per_hour_f * (self.heating_setpoint_f - t_out) - q_free
        if heating_load > 0:
            return heating_load, self.heating_setpoint_f

        cooling_load = self.ua_btu_per_hour_f * (t_out - self.cooling_setpoint_f) + q_free
        if cooling_load > 0:
            return -cooling_load, self.cooling_setpoint_f

        return 0.0, self.heating_setpoint_f
