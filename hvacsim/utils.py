import json
import re

import pandas as pd

NS_PER_HOUR = 3600 * 10**9


def celsius_to_fahrenheit(temp_c):
    return temp_c * 9.0 / 5.0 + 32.0


def fahrenheit_to_celsius(temp_f):
    return (temp_f - 32.0) * 5.0 / 9.0


def to_utc_timestamp(value) -> pd.Timestamp:
    """
    Normalizes a datetime, pandas Timestamp, numpy datetime64 or ISO-8601 string
    to a tz-aware UTC Timestamp. Naive values are taken to already be UTC.
    """
    try:
        ts = pd.Timestamp(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Cannot interpret {value!r} as a timestamp") from e

    if ts is pd.NaT:
        raise ValueError(f"Cannot interpret {value!r} as a timestamp")

    if ts.tz is None:
        return ts.tz_localize("UTC")
    return ts.tz_convert("UTC")


def hour_key(value) -> int:
    """Integer number of whole UTC hours since the Unix epoch (floored)."""
    ts = to_utc_timestamp(value)
    return ts.value // NS_PER_HOUR


def hour_start(key: int) -> pd.Timestamp:
    return pd.Timestamp(key * NS_PER_HOUR, tz="UTC")


def hour_label(key: int) -> str:
    """Human readable UTC hour, e.g. '2023-01-01 05'."""
    return hour_start(key).strftime("%Y-%m-%d %H")


def load_json(json_path):
    """Reads a JSON file, allowing C-style // comments for user annotations."""
    with open(json_path, 'r') as f:
        content = re.sub(r'//.*', '', f.read())
    return json.loads(content)
