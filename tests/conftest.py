"""Pytest configuration."""
import os
import sys

import pytest

# Add the repo root to sys.path so `import main` and `import generate_weather` work.
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Never open plot windows during tests
os.environ.setdefault("MPLBACKEND", "Agg")


def make_record(datetime, temp_f=30.0, humidity=80.0, wind=5.0, cloud=50.0, altitude=10.0, watts=100.0):
    return {
        "datetime": datetime,
        "outsideAirTempF": temp_f,
        "relativeHumidityPercent": humidity,
        "windSpeedMph": wind,
        "cloudCoverPercent": cloud,
        "solarIrradiance": {"altitudeDegrees": altitude, "wattsPerSquareMeter": watts},
    }


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def hourly_records():
    """Three hours of data, 2023-01-01 05:00-07:00 UTC."""
    return [
        make_record("2023-01-01T05:00:00Z", temp_f=20.0, humidity=80.0, wind=4.0, cloud=100.0,
                    altitude=10.0, watts=100.0),
        make_record("2023-01-01T06:00:00Z", temp_f=30.0, humidity=60.0, wind=12.0, cloud=50.0,
                    altitude=20.0, watts=200.0),
        make_record("2023-01-01T07:00:00Z", temp_f=26.0, humidity=70.0, wind=8.0, cloud=0.0,
                    altitude=30.0, watts=400.0),
    ]
