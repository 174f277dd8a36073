"""
Outdoor weather model and hourly weather sources.

A WeatherSource answers "what were outdoor conditions at this instant?".
HourlyWeatherSource is backed by one sample per UTC hour and linearly
interpolates between the two samples bracketing the requested time.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace

import pandas as pd

from .interpolate import interpolate
from .utils import NS_PER_HOUR, hour_key, hour_label, hour_start, load_json, to_utc_timestamp

_LOGGER = logging.getLogger(__name__)

# Column names for tabular (CSV / DataFrame) weather input
DATAFRAME_COLUMNS = (
    'outside_air_temp_f',
    'relative_humidity_percent',
    'wind_speed_mph',
    'cloud_cover_percent',
)
SOLAR_ALTITUDE_COLUMN = 'solar_altitude_degrees'
SOLAR_WATTS_COLUMN = 'solar_watts_per_square_meter'


class MissingWeatherDataError(LookupError):
    """Raised when no sample exists for a UTC hour that a query needs."""

    def __init__(self, key: int):
        self.hour_key = key
        self.hour_label = hour_label(key)
        super().__init__(f"No weather entry for {self.hour_label} UTC")


@dataclass(frozen=True)
class SolarIrradiance:
    altitude_degrees: float           # Sun elevation; negative once it has set
    watts_per_square_meter: float

    def __post_init__(self):
        # Below the horizon there is no direct sun, whatever the data says
        if self.altitude_degrees < 0 and self.watts_per_square_meter != 0:
            object.__setattr__(self, 'watts_per_square_meter', 0.0)


@dataclass(frozen=True)
class WeatherSnapshot:
    """Outdoor conditions at a single instant."""
    outside_air_temp_f: float
    relative_humidity_percent: float
    wind_speed_mph: float
    cloud_cover_percent: float
    solar_irradiance: SolarIrradiance

    @classmethod
    def from_record(cls, record: dict) -> "WeatherSnapshot":
        """Builds a snapshot from a camelCase JSON weather record."""
        solar = record['solarIrradiance']
        return cls(
            outside_air_temp_f=float(record['outsideAirTempF']),
            relative_humidity_percent=float(record['relativeHumidityPercent']),
            wind_speed_mph=float(record['windSpeedMph']),
            cloud_cover_percent=float(record['cloudCoverPercent']),
            solar_irradiance=SolarIrradiance(
                altitude_degrees=float(solar['altitudeDegrees']),
                watts_per_square_meter=float(solar['wattsPerSquareMeter']),
            ),
        )


class WeatherSource(ABC):

    @abstractmethod
    def get_weather(self, time) -> WeatherSnapshot:
        """Returns outdoor conditions at `time` (datetime, Timestamp or ISO string)."""


class HourlyWeatherSource(WeatherSource):
    """
    Weather source backed by hourly samples.

    Samples are bucketed by UTC hour (integer hours since the epoch), so the
    same instant expressed in different timezones lands in the same bucket.
    The table is built once and never mutated, so one instance can be shared
    by any number of concurrently running simulations.
    """

    def __init__(self, entries):
        """
        Args:
            entries: iterable of either camelCase records carrying a 'datetime'
                ISO-8601 field, or (timestamp, WeatherSnapshot) pairs.
        """
        table = {}
        for i, entry in enumerate(entries):
            timestamp, snapshot = self._parse_entry(i, entry)
            key = hour_key(timestamp)
            if key in table:
                _LOGGER.warning("Duplicate weather entry for %s UTC (entry %d); keeping the later one.",
                                hour_label(key), i)
            table[key] = snapshot

        self._entry_by_hour = table
        _LOGGER.debug("Built hourly weather table with %d entries", len(table))

    @staticmethod
    def _parse_entry(index, entry):
        if isinstance(entry, dict):
            try:
                timestamp = to_utc_timestamp(entry['datetime'])
                return timestamp, WeatherSnapshot.from_record(entry)
            except KeyError as e:
                raise ValueError(f"Weather entry {index} is missing field {e}") from e
            except (TypeError, ValueError) as e:
                raise ValueError(f"Weather entry {index} is invalid: {e}") from e

        timestamp, snapshot = entry
        if not isinstance(snapshot, WeatherSnapshot):
            raise ValueError(f"Weather entry {index} must pair a timestamp with a WeatherSnapshot")
        return to_utc_timestamp(timestamp), snapshot

    @classmethod
    def from_json(cls, json_path):
        entries = load_json(json_path)
        if isinstance(entries, dict):
            # Allow {"entries": [...]} wrappers
            entries = entries.get('entries', [])
        return cls(entries)

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame):
        """
        Builds a source from a table with a 'time' column (or DatetimeIndex) and
        snake_case weather columns.
        """
        if 'time' in df.columns:
            times = pd.to_datetime(df['time'], utc=True)
        elif isinstance(df.index, pd.DatetimeIndex):
            times = df.index.to_series()
        else:
            raise ValueError("Weather table needs a 'time' column or a DatetimeIndex")

        required = list(DATAFRAME_COLUMNS) + [SOLAR_ALTITUDE_COLUMN, SOLAR_WATTS_COLUMN]
        for col in required:
            if col not in df.columns:
                raise ValueError(f"Missing required column: {col}")

        entries = []
        for ts, row in zip(times, df.itertuples(index=False)):
            values = row._asdict()
            snapshot = WeatherSnapshot(
                outside_air_temp_f=float(values['outside_air_temp_f']),
                relative_humidity_percent=float(values['relative_humidity_percent']),
                wind_speed_mph=float(values['wind_speed_mph']),
                cloud_cover_percent=float(values['cloud_cover_percent']),
                solar_irradiance=SolarIrradiance(
                    altitude_degrees=float(values[SOLAR_ALTITUDE_COLUMN]),
                    watts_per_square_meter=float(values[SOLAR_WATTS_COLUMN]),
                ),
            )
            entries.append((ts, snapshot))
        return cls(entries)

    @classmethod
    def from_csv(cls, csv_path):
        return cls.from_dataframe(pd.read_csv(csv_path))

    def __len__(self):
        return len(self._entry_by_hour)

    def time_range(self):
        """First and last sampled UTC hour, or (None, None) when empty."""
        if not self._entry_by_hour:
            return None, None
        return hour_start(min(self._entry_by_hour)), hour_start(max(self._entry_by_hour))

    def missing_hours(self, start, end):
        """UTC hours in [start, end] that have no sample."""
        first = hour_key(start)
        last = hour_key(end)
        return [hour_start(k) for k in range(first, last + 1) if k not in self._entry_by_hour]

    def _get_weather_for_hour(self, key: int) -> WeatherSnapshot:
        try:
            return self._entry_by_hour[key]
        except KeyError:
            raise MissingWeatherDataError(key) from None

    def get_weather(self, time) -> WeatherSnapshot:
        ts = to_utc_timestamp(time)

        start_key = ts.value // NS_PER_HOUR
        start_weather = self._get_weather_for_hour(start_key)

        elapsed_ns = ts.value - start_key * NS_PER_HOUR
        if elapsed_ns == 0:
            # Exactly on the hour
            return start_weather

        end_weather = self._get_weather_for_hour(start_key + 1)

        # Linear in time within the hour. Most of these quantities are not
        # linear, but it is close enough at hourly resolution.
        fraction = elapsed_ns / NS_PER_HOUR

        def lerp(a, b):
            return interpolate(0.0, a, 1.0, b, fraction)

        start_sun = start_weather.solar_irradiance
        end_sun = end_weather.solar_irradiance
        # SolarIrradiance zeroes the wattage when the interpolated sun is below the horizon
        solar_irradiance = SolarIrradiance(
            altitude_degrees=lerp(start_sun.altitude_degrees, end_sun.altitude_degrees),
            watts_per_square_meter=lerp(start_sun.watts_per_square_meter, end_sun.watts_per_square_meter),
        )

        return replace(
            start_weather,
            outside_air_temp_f=lerp(start_weather.outside_air_temp_f, end_weather.outside_air_temp_f),
            relative_humidity_percent=lerp(start_weather.relative_humidity_percent,
                                           end_weather.relative_humidity_percent),
            # No direction information, so only speed is interpolated
            wind_speed_mph=lerp(start_weather.wind_speed_mph, end_weather.wind_speed_mph),
            cloud_cover_percent=lerp(start_weather.cloud_cover_percent, end_weather.cloud_cover_percent),
            solar_irradiance=solar_irradiance,
        )
