# access/controller.py
"""
File: controller.py
Description:
  Authorization core of the keypad controller.
  Resolves a submitted code to a registry entry, checks its day and hour
  windows, toggles test mode, issues temporary codes on denial and operates
  the door relay. Owns all session state; every method is expected to run on
  the event dispatcher's thread.
"""

import logging
from datetime import datetime, timedelta

from access.testmode import TestModeState
from access.temp_codes import TempCodeIssuer
from access.validator import is_authorized
from config.constants import MESSAGES

logger = logging.getLogger("access")


class AccessController:
    def __init__(self, registry, settings, relay, sensor, notifier, scheduler, clock=datetime.now,
                 issuer=None):
        self.registry = registry
        self.settings = settings
        self.relay = relay
        self.sensor = sensor
        self.notifier = notifier
        self.scheduler = scheduler
        self.clock = clock
        self.issuer = issuer or TempCodeIssuer(
            settings.temp_code_timeout_seconds, settings.temp_code_ttl_minutes
        )

        self.test_mode = TestModeState(settings.testmode_timeout_msec)
        self.last_successful_code_at = None
        self.last_granted_entry = None

    def submit_code(self, code):
        now = self.clock()
        entry = self.registry.find(code, now)
        if entry is None:
            logger.info(f"[ACCESS] No entry found for {code}")
            return

        logger.info(
            f"[ACCESS] Entry [{code}] name: {entry.name} alert: {entry.alert} "
            f"valid_days: {sorted(entry.valid_days) if entry.valid_days else None} "
            f"valid_hours: {entry.valid_hours}"
        )

        if not is_authorized(entry, now):
            self._deny(entry, now)
            return

        if entry.testmode:
            if not self.test_mode.active:
                self._arm_test_mode(entry, now)
            elif self.test_mode.is_armed_by(entry):
                self.test_mode.disarm()
                logger.info(f"[TESTMODE] Deactivated by {entry.name}")
                self._notify(entry, MESSAGES["testmode_off"])
                return

        if not self.test_mode.active:
            self._grant(entry, now)
        else:
            logger.info(f"[TESTMODE] Code {code} accepted; relay not triggered")
            self._notify(self.test_mode.armed_entry, MESSAGES["testmode_code"].format(code=code))

    def close_helper(self):
        """Re-pulse the relay shortly after a grant to close an open door."""
        now = self.clock()
        if self.last_successful_code_at is None:
            logger.info("[CLOSE] No successful code yet; ignoring")
            return False

        if now - self.last_successful_code_at > timedelta(seconds=self.settings.close_helper_seconds):
            logger.info("[CLOSE] Threshold since last valid entry has passed; ignoring")
            return False

        if not self.sensor.is_door_open():
            logger.info("[CLOSE] Door was NOT open; ignoring")
            return False

        logger.info("[CLOSE] Closing door")
        if not self.relay.trigger_pulse():
            logger.warning("[CLOSE] Relay busy; door not moved")
            return False
        if self.last_granted_entry is not None:
            self._notify_grant(self.last_granted_entry)
        return True

    def purge_expired(self):
        removed = self.registry.purge_expired(self.clock())
        if self.settings.temp_code_purge_minutes > 0:
            self.scheduler.call_later(self.settings.temp_code_purge_minutes * 60, self.purge_expired)
        return removed

    def _grant(self, entry, now):
        logger.info(f"[ACCESS] Granted to {entry.name}")
        if not self.relay.trigger_pulse():
            logger.warning(f"[ACCESS] Relay busy; grant for {entry.name} not recorded")
            return
        self._notify_grant(entry)
        self.last_successful_code_at = now
        self.last_granted_entry = entry

    def _deny(self, entry, now):
        logger.warning(f"[ACCESS] Denied: {entry.name} not permitted at this time")
        if not entry.temp_code_allowed:
            return

        temp = self.issuer.issue(entry, now)
        if temp is None:
            return
        self.registry.add(temp)
        self._notify(entry, MESSAGES["temp_code"].format(
            code=temp.code, name=entry.name, minutes=self.issuer.ttl_minutes
        ))

    def _arm_test_mode(self, entry, now):
        token = self.test_mode.arm(entry, now)
        logger.info(f"[TESTMODE] Activated by {entry.name} until {self.test_mode.deadline}")
        self._notify(entry, MESSAGES["testmode_on"])
        self.scheduler.call_later(self.test_mode.duration.total_seconds(), self._test_mode_expired, token)

    def _test_mode_expired(self, token):
        if not self.test_mode.active or self.test_mode.token != token:
            logger.info("[TESTMODE] Stale timeout ignored")
            return

        entry = self.test_mode.disarm()
        logger.info("[TESTMODE] Turning off test mode")
        self._notify(entry, MESSAGES["testmode_timeout"].format(seconds=self.test_mode.duration_seconds))

    def _notify_grant(self, entry):
        msg = entry.message
        if not msg:
            key = "closed" if self.sensor.is_door_open() else "opened"
            msg = MESSAGES[key].format(name=entry.name)
        self._notify(entry, msg)

    def _notify(self, entry, message):
        if not entry.alert:
            logger.info(f"[NOTIFY] No alert group for {entry.name}; ignoring")
            return
        self.notifier.send(entry.alert, message)
