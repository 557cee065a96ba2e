# relay/controller.py
"""
File: controller.py
Description:
  Drives the door relay. A trigger is a timed pulse: the pin goes high, and
  after the configured delay goes low and is released again.
"""

import logging
from hardware.pins import INPUT, OUTPUT, HIGH, LOW

logger = logging.getLogger("relay")


class RelayController:
    def __init__(self, gpio, pin, pulse_msec, scheduler):
        self.gpio = gpio
        self.pin = pin
        self.pulse_seconds = pulse_msec / 1000.0
        self.scheduler = scheduler
        self.pulsing = False

    def setup(self):
        # unpowered until the first pulse
        self.gpio.configure_pin(self.pin, INPUT)

    def trigger_pulse(self):
        if self.pulsing:
            logger.warning("[RELAY] Pulse already in progress; trigger dropped")
            return False

        logger.info("[RELAY] Triggering door relay!")
        self.pulsing = True
        self.gpio.configure_pin(self.pin, OUTPUT, initial=LOW)
        self.gpio.write_pin(self.pin, HIGH)
        self.scheduler.call_later(self.pulse_seconds, self._end_pulse)
        return True

    def _end_pulse(self):
        self.gpio.write_pin(self.pin, LOW)
        self.gpio.release_pin(self.pin)
        self.pulsing = False
        logger.info("[RELAY] Relay released")

    def turn_off(self):
        self.gpio.configure_pin(self.pin, OUTPUT, initial=LOW)
        self.gpio.write_pin(self.pin, LOW)
        self.pulsing = False
