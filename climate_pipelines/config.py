"""Configuration constants for climate pipelines."""
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"
NORMALS_DIR = DATA_DIR / "normals"

# Profile lengths
COMMON_YEAR_DAYS = 365
LEAP_YEAR_DAYS = 366

# Cumulative days before the first of each month
CUM_MONTH_DAYS_COMMON = [0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334]
CUM_MONTH_DAYS_LEAP = [0, 31, 60, 91, 121, 152, 182, 213, 244, 274, 305, 335]

# Open-Meteo endpoints
GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
ARCHIVE_URL = "https://archive-api.open-meteo.com/v1/era5"
REQUEST_TIMEOUT_SECONDS = 30
NORMALS_TIMEOUT_SECONDS = 120
USER_AGENT = "climate-normals/1.0"

# Archive variables
DAILY_VARIABLES = [
    "temperature_2m_max",
    "temperature_2m_min",
    "temperature_2m_mean",
    "precipitation_sum",
    "windspeed_10m_max",
]
HOURLY_VARIABLES = ["relative_humidity_2m", "windspeed_10m"]
NORMALS_VARIABLE = "temperature_2m_mean"

# 30-year climate normals window
NORMALS_START_DATE = "1991-01-01"
NORMALS_END_DATE = "2020-12-31"

# Statistics
PRECIP_DAY_THRESHOLD_MM = 0.1

# Pause between consecutive archive requests (rate limiting)
REQUEST_DELAY_SECONDS = 0.3
