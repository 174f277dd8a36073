#!/usr/bin/python3

import argparse
import json
import logging
import os
import sys

import pandas as pd

from hvacsim import billing
from hvacsim import config
from hvacsim import results
from hvacsim import simulate
from hvacsim.constants import (
    DEFAULT_COOLING_SETPOINT_C,
    DEFAULT_ELECTRICITY_PRICE_PER_KWH,
    DEFAULT_FLOOR_AREA_SQ_FT,
    DEFAULT_HEATING_SETPOINT_C,
    DEFAULT_NATURAL_GAS_PRICE_PER_CUBIC_METRE,
    DEFAULT_TIME_STEP,
)
from hvacsim.loads import BuildingLoadModel
from hvacsim.utils import celsius_to_fahrenheit
from hvacsim.weather import HourlyWeatherSource, MissingWeatherDataError


def load_weather(path):
    print(f"Loading weather from {path}...")
    if path.lower().endswith('.csv'):
        weather = HourlyWeatherSource.from_csv(path)
    else:
        weather = HourlyWeatherSource.from_json(path)
    first, last = weather.time_range()
    print(f"Loaded {len(weather)} hourly samples ({first} to {last}).")
    return weather


def export_summary(filename, summaries, args):
    """Writes the scenario comparison to JSON for automation use."""
    data = {
        "generated_at": pd.Timestamp.now(tz="UTC").isoformat(),
        "weather_file": args.weather_file,
        "prices": {
            "electricity_per_kwh": args.electricity_price,
            "natural_gas_per_cubic_metre": args.gas_price,
        },
        "scenarios": summaries,
    }
    with open(filename, 'w') as f:
        json.dump(data, f, indent=2)
    print(f"Summary saved to: {filename}")


def run_main(args_list=None):
    parser = argparse.ArgumentParser(
        description="Annual HVAC energy cost comparison against historical weather",
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument("weather_file", nargs='?', help="Hourly weather data (.json records or .csv table)")
    parser.add_argument("-s", "--scenarios", default="data/scenarios.json",
                        help="Scenario JSON listing the appliances to compare (default: data/scenarios.json)")

    # Simulated Period
    parser.add_argument("--start", help="Simulation start (ISO-8601, default: first weather hour)")
    parser.add_argument("--end", help="Simulation end, exclusive (ISO-8601, default: last weather hour + 1h)")
    parser.add_argument("--freq", default=DEFAULT_TIME_STEP,
                        help=f"Simulation time step (default: {DEFAULT_TIME_STEP})")

    # House
    parser.add_argument("--floor-area", type=float, default=DEFAULT_FLOOR_AREA_SQ_FT,
                        help=f"Conditioned floor space in sq ft (default: {DEFAULT_FLOOR_AREA_SQ_FT:.0f})")
    parser.add_argument("--ua", type=float, help="Envelope UA in BTU/hr/F (overrides --floor-area estimate)")
    parser.add_argument("--heating-setpoint-c", type=float, default=DEFAULT_HEATING_SETPOINT_C,
                        help=f"Heat when colder than this (C, default: {DEFAULT_HEATING_SETPOINT_C})")
    parser.add_argument("--cooling-setpoint-c", type=float, default=DEFAULT_COOLING_SETPOINT_C,
                        help=f"Cool when hotter than this (C, default: {DEFAULT_COOLING_SETPOINT_C})")

    # Prices
    parser.add_argument("--electricity-price", type=float, default=DEFAULT_ELECTRICITY_PRICE_PER_KWH,
                        help="Electricity price per kWh")
    parser.add_argument("--gas-price", type=float, default=DEFAULT_NATURAL_GAS_PRICE_PER_CUBIC_METRE,
                        help="Natural gas price per cubic metre")
    parser.add_argument("--electricity-fixed", type=float, default=0.0, help="Monthly electricity connection charge")
    parser.add_argument("--gas-fixed", type=float, default=0.0, help="Monthly gas connection charge")

    # Output Options
    parser.add_argument("-o", "--output", metavar="JSON_FILE", help="Export the comparison to a JSON file")
    parser.add_argument("--no-plot", action="store_true", help="Skip the cost chart")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    if args_list is None and len(sys.argv) == 1:
        parser.print_help()
        print("\nUsage Examples:")
        print("  1. Compare the default scenarios over a weather year:")
        print("     python main.py weather_2023.json")
        print("\n  2. Custom scenarios and prices:")
        print("     python main.py weather_2023.json -s my_scenarios.json --gas-price 0.38 --electricity-price 0.11")
        print("\n  3. Generate a synthetic weather year first:")
        print("     python generate_weather.py weather.json && python main.py weather.json --no-plot")
        return 1

    args = parser.parse_args(args_list)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    if not args.weather_file:
        print("Error: You must provide a weather file.")
        return 1
    if not os.path.exists(args.weather_file):
        print(f"Error: Weather file '{args.weather_file}' not found.")
        return 1
    if not os.path.exists(args.scenarios):
        print(f"Error: Scenario file '{args.scenarios}' not found.")
        return 1

    # 1. Load Inputs
    try:
        weather = load_weather(args.weather_file)
        scenarios = config.load_scenarios(args.scenarios)
    except ValueError as e:
        print(f"Error loading inputs: {e}")
        return 1

    if len(weather) == 0:
        print("Error: Weather file contains no samples.")
        return 1

    first, last = weather.time_range()
    start = args.start or first
    end = args.end or (last + pd.Timedelta(hours=1))

    # 2. Building Model
    setpoints = dict(
        heating_setpoint_f=celsius_to_fahrenheit(args.heating_setpoint_c),
        cooling_setpoint_f=celsius_to_fahrenheit(args.cooling_setpoint_c),
    )
    try:
        if args.ua is not None:
            load_model = BuildingLoadModel(ua_btu_per_hour_f=args.ua, **setpoints)
        else:
            load_model = BuildingLoadModel.from_floor_area(args.floor_area, **setpoints)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    # 3. Simulate
    print(f"\n--- SIMULATING {len(scenarios)} SCENARIO(S) ---")
    try:
        frames = simulate.run_scenarios(weather, scenarios, load_model, start, end, freq=args.freq)
    except MissingWeatherDataError as e:
        print(f"Error: {e}. The weather dataset is incomplete for the simulated period.")
        return 1
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    # 4. Bills
    prices = billing.UtilityPrices(
        electricity_price_per_kwh=args.electricity_price,
        natural_gas_price_per_cubic_metre=args.gas_price,
        electricity_fixed_monthly=args.electricity_fixed,
        natural_gas_fixed_monthly=args.gas_fixed,
    )
    summaries = [results.summarize(name, df, prices) for name, df in frames.items()]
    results.print_summary(summaries)

    if args.output:
        export_summary(args.output, summaries, args)

    if not args.no_plot:
        results.plot_annual_costs(summaries)

    return 0


if __name__ == "__main__":
    sys.exit(run_main())
