"""Configuration for the scheduling core.

Business constants live here; the working-day bounds and log level can be
overridden through environment variables (or a .env file).
"""
import os
from datetime import date

from dotenv import load_dotenv

load_dotenv()

# Working day used by the slot grid
DAY_START = os.getenv("SCHEDULING_DAY_START", "09:00")
DAY_END = os.getenv("SCHEDULING_DAY_END", "17:00")
SLOT_DURATION_MINUTES = int(os.getenv("SCHEDULING_SLOT_MINUTES", "30"))

LOG_LEVEL = os.getenv("SCHEDULING_LOG_LEVEL", "INFO")

# Schedules with valid_to == "always" are treated as ending on this date
ALWAYS = "always"
OPEN_ENDED_VALID_TO = date(2999, 12, 31)

# Store-owned appointment numbering: APT-1001, APT-1002, ...
APPOINTMENT_ID_PREFIX = "APT"
APPOINTMENT_ID_START = 1000

WILDCARD = "all"

DAYS_OF_WEEK = [
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
]

# Slot lengths offered by the schedule form
SLOT_DURATIONS = [10, 15, 20, 30, 45, 60]
