# access/testmode.py
"""
File: testmode.py
Description:
  Test mode state. While armed, valid codes are reported to the armed entry's
  alert group instead of operating the door. Each arming gets its own token so
  an auto-deactivation timer can only end the session it was scheduled for.
"""

import itertools
from datetime import timedelta


class TestModeState:
    def __init__(self, duration_msec):
        self.duration = timedelta(milliseconds=duration_msec)
        self.armed_entry = None
        self.deadline = None
        self.token = None
        self._tokens = itertools.count(1)

    @property
    def active(self):
        return self.armed_entry is not None

    @property
    def duration_seconds(self):
        return int(self.duration.total_seconds())

    def arm(self, entry, now):
        self.armed_entry = entry
        self.deadline = now + self.duration
        self.token = next(self._tokens)
        return self.token

    def disarm(self):
        entry = self.armed_entry
        self.armed_entry = None
        self.deadline = None
        self.token = None
        return entry

    def is_armed_by(self, entry):
        return self.armed_entry is entry
