# access/validator.py
"""
File: validator.py
Description:
  Schedule checks for registry entries.
  An entry may restrict the weekdays and the hours of the day its code is
  honored on; an unset restriction always passes.
"""

import logging

from config.constants import DAYS

logger = logging.getLogger("validator")


def is_valid_day(entry, now):
    if entry.valid_days is None:
        return True

    day = DAYS[now.weekday()]
    allowed = day in entry.valid_days
    logger.info(f"[VALIDATOR] Day: {day} allowed for {entry.name}: {allowed}")
    return allowed


def is_valid_hour(entry, now):
    if entry.valid_hours is None:
        return True

    start, end = entry.valid_hours
    logger.info(f"[VALIDATOR] Current hour: {now.hour} valid start: {start} end: {end}")
    return start <= now.hour <= end


def is_authorized(entry, now):
    return is_valid_day(entry, now) and is_valid_hour(entry, now)
