# agrorain/config.py
import os
from zoneinfo import ZoneInfo

# --------------------------------------------------------------------
# Configuration
# --------------------------------------------------------------------
# Everything comes from the environment. Without FIRESTORE_PROJECT_ID the
# app runs against the local SQLite file only.
DB_URL = os.getenv("AGRORAIN_DB_URL", "sqlite:///agrorain.db")

FIRESTORE_PROJECT_ID = os.getenv("FIRESTORE_PROJECT_ID", "").strip()
FIRESTORE_API_KEY = os.getenv("FIRESTORE_API_KEY", "").strip()
FIRESTORE_BASE_URL = os.getenv(
    "FIRESTORE_BASE_URL",
    "https://firestore.googleapis.com/v1",
).rstrip("/")

TZ_NAME = os.getenv("AGRORAIN_TZ", "America/Sao_Paulo")
TZ = ZoneInfo(TZ_NAME)

# 0 = Sunday ... 6 = Saturday
WEEK_START = int(os.getenv("AGRORAIN_WEEK_START", "0"))

POLL_SECONDS = float(os.getenv("AGRORAIN_POLL_SECONDS", "10"))
HTTP_TIMEOUT = float(os.getenv("AGRORAIN_HTTP_TIMEOUT", "10"))

# Brasília, used when no gauge has usable coordinates
DEFAULT_CENTER = (-15.7801, -47.9292)

LOCAL_GAUGES_KEY = "agrorain_gauges"
LOCAL_RECORDS_KEY = "agrorain_records"
