"""
Trend module for the HyderAQI dashboard core.

Builds the intraday AQI trend shown in the dashboard chart. There is no
historical store, so the series is a fixed pattern of offsets around the
location's current AQI.
"""

import pandas as pd

from .aqi_classifier import status_label
from .location_data import LocationData


# (time label, offset from current AQI)
TREND_OFFSETS = [
    ("12 AM", -10),
    ("4 AM", -15),
    ("8 AM", 5),
    ("12 PM", 20),
    ("4 PM", 15),
    ("8 PM", 0),
]


def build_trend(location: LocationData) -> pd.DataFrame:
    """
    Returns the six-point trend for a location.

    Values are clamped at 0 so low-AQI stations never chart negative readings.

    Returns:
        DataFrame with columns ``time``, ``aqi`` and ``status``
    """
    df = pd.DataFrame(TREND_OFFSETS, columns=["time", "offset"])
    df["aqi"] = (location.aqi + df["offset"]).clip(lower=0)
    df["status"] = df["aqi"].map(status_label)
    return df[["time", "aqi", "status"]]
