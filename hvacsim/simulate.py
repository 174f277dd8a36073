import logging

import pandas as pd

from .constants import DEFAULT_TIME_STEP
from .utils import NS_PER_HOUR, hour_key, to_utc_timestamp
from .weather import HourlyWeatherSource, MissingWeatherDataError

_LOGGER = logging.getLogger(__name__)

# Every simulation frame has these; anything else is a fuel carrier rate column
BASE_COLUMNS = (
    'outside_air_temp_f',
    'inside_air_temp_f',
    'btus_per_hour_needed',
    'btus_per_hour',
    'dt_hours',
)


def simulation_steps(start, end, freq=DEFAULT_TIME_STEP) -> pd.DatetimeIndex:
    """Step times in [start, end), UTC."""
    start_ts = to_utc_timestamp(start)
    end_ts = to_utc_timestamp(end)
    if end_ts <= start_ts:
        raise ValueError(f"Simulation end {end_ts} must be after start {start_ts}")
    return pd.date_range(start_ts, end_ts, freq=freq, inclusive='left')


def check_weather_coverage(weather: HourlyWeatherSource, steps: pd.DatetimeIndex):
    """
    Raises MissingWeatherDataError for the first hour the steps would need but
    the weather source does not have.
    """
    last = steps[-1]
    last_needed = last
    if last.value % NS_PER_HOUR != 0:
        # Off-hour steps also need the following hour to interpolate
        last_needed = last + pd.Timedelta(hours=1)

    missing = weather.missing_hours(steps[0], last_needed)
    if missing:
        _LOGGER.error("Weather data is missing %d hour(s) in the simulated period", len(missing))
        raise MissingWeatherDataError(hour_key(missing[0]))


def simulate(weather, appliance, load_model, start, end, freq=DEFAULT_TIME_STEP) -> pd.DataFrame:
    """
    Steps through [start, end) asking the load model for a demand and the
    appliance for its response at every step.

    Returns a DataFrame indexed by UTC step time, with one extra column per
    fuel carrier holding its consumption rate (units per hour).
    """
    steps = simulation_steps(start, end, freq)
    dt_hours = pd.Timedelta(freq).total_seconds() / 3600.0

    if isinstance(weather, HourlyWeatherSource):
        check_weather_coverage(weather, steps)

    records = []
    for ts in steps:
        snapshot = weather.get_weather(ts)
        needed, t_in = load_model.get_demand(snapshot)
        response = appliance.get_thermal_response(needed, t_in, snapshot.outside_air_temp_f)

        row = {
            'outside_air_temp_f': snapshot.outside_air_temp_f,
            'inside_air_temp_f': t_in,
            'btus_per_hour_needed': needed,
            'btus_per_hour': response.btus_per_hour,
            'dt_hours': dt_hours,
        }
        row.update(response.fuel_usage)
        records.append(row)

    df = pd.DataFrame(records, index=steps)
    df.index.name = 'time'

    carriers = fuel_carriers(df)
    if carriers:
        # Carriers only reported on some steps
        df[carriers] = df[carriers].fillna(0.0)

    _LOGGER.debug("Simulated %d steps for %s", len(df), getattr(appliance, 'name', appliance))
    return df


def fuel_carriers(df: pd.DataFrame):
    return [c for c in df.columns if c not in BASE_COLUMNS]


def usage_totals(df: pd.DataFrame) -> dict:
    """Total consumption per carrier over the whole frame (rate x step length)."""
    return {c: float((df[c] * df['dt_hours']).sum()) for c in fuel_carriers(df)}


def unmet_load_btu(df: pd.DataFrame) -> float:
    """Heating/cooling energy (BTU) the appliance could not deliver."""
    shortfall = (df['btus_per_hour_needed'] - df['btus_per_hour']).abs()
    return float((shortfall * df['dt_hours']).sum())


def run_scenarios(weather, scenarios: dict, load_model, start, end, freq=DEFAULT_TIME_STEP) -> dict:
    """
    Runs each named appliance against the same weather source and load model.
    The weather source is only read, so it is shared between scenarios.
    """
    results = {}
    for name, appliance in scenarios.items():
        _LOGGER.info("Running scenario '%s'", name)
        results[name] = simulate(weather, appliance, load_model, start, end, freq=freq)
    return results
