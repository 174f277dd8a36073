#!/usr/bin/python3

import json
import sys

import numpy as np
import pandas as pd


def generate_weather(start="2023-01-01 00:00", hours=8760, latitude=45.0, seed=0):
    """
    Synthetic hourly weather records in the camelCase JSON layout.
    Good enough to exercise the simulator; not a substitute for real data.
    """
    rng = np.random.default_rng(seed)
    timestamps = pd.date_range(start=start, periods=hours, freq="1h", tz="UTC")

    day_of_year = timestamps.dayofyear.values
    hour = timestamps.hour.values + timestamps.minute.values / 60

    # 1. Outdoor Temp: Annual swing 15F (Jan) to 75F (Jul) plus a daily swing
    # of +/-8F with the minimum at 6am and the maximum at 3pm
    seasonal = 45 - 30 * np.cos((day_of_year - 15) * 2 * np.pi / 365)
    daily = -8 * np.cos((hour - 3) * np.pi / 12)
    t_out = seasonal + daily + rng.normal(0, 2, hours)

    # 2. Solar Position: declination + hour angle (solar time == UTC hour here)
    lat = np.radians(latitude)
    decl = np.radians(23.44) * np.sin(2 * np.pi * (284 + day_of_year) / 365)
    hour_angle = np.radians(15 * (hour - 12))
    sin_alt = np.sin(lat) * np.sin(decl) + np.cos(lat) * np.cos(decl) * np.cos(hour_angle)
    altitude = np.degrees(np.arcsin(sin_alt))

    # 3. Clouds, humidity, wind
    cloud = np.clip(rng.normal(50, 30, hours), 0, 100)
    humidity = np.clip(70 - 0.3 * (t_out - 45) + rng.normal(0, 8, hours), 5, 100)
    wind = np.abs(rng.normal(8, 4, hours))

    # 4. Irradiance: clear-sky ~1000 W/m^2 at zenith, cut by clouds
    watts = np.maximum(0, 1000 * sin_alt) * (1 - 0.75 * cloud / 100)

    records = []
    for i, ts in enumerate(timestamps):
        records.append({
            "datetime": ts.isoformat(),
            "outsideAirTempF": round(float(t_out[i]), 2),
            "relativeHumidityPercent": round(float(humidity[i]), 1),
            "windSpeedMph": round(float(wind[i]), 1),
            "cloudCoverPercent": round(float(cloud[i]), 1),
            "solarIrradiance": {
                "altitudeDegrees": round(float(altitude[i]), 2),
                "wattsPerSquareMeter": round(float(watts[i]), 1),
            },
        })
    return records


if __name__ == "__main__":
    filename = sys.argv[1] if len(sys.argv) > 1 else "weather.json"
    records = generate_weather()
    with open(filename, "w") as f:
        json.dump(records, f)
    print(f"Successfully generated {filename} with {len(records)} hourly records.")
    print(f"You can now run: python main.py {filename}")
