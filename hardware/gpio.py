# hardware/gpio.py
"""
File: gpio.py
Description:
  Thin pin interface over RPi.GPIO (BOARD numbering).
  The keypad scanner, relay and door sensor only talk to the pins through
  this class, so they can run against a fake in tests.
"""

import logging
import RPi.GPIO as GPIO

from hardware.pins import OUTPUT, PULL_UP, PULL_DOWN, PULL_NONE, HIGH, LOW

logger = logging.getLogger("gpio")

EDGE_BOUNCE_MS = 50


class RpiGpio:
    def __init__(self):
        GPIO.setwarnings(False)
        GPIO.setmode(GPIO.BOARD)
        self._pull = {PULL_UP: GPIO.PUD_UP, PULL_DOWN: GPIO.PUD_DOWN, PULL_NONE: GPIO.PUD_OFF}

    def configure_pin(self, pin, direction, pull=PULL_NONE, initial=None):
        if direction == OUTPUT:
            GPIO.setup(pin, GPIO.OUT, initial=GPIO.HIGH if initial else GPIO.LOW)
        else:
            GPIO.setup(pin, GPIO.IN, pull_up_down=self._pull[pull])

    def read_pin(self, pin):
        return HIGH if GPIO.input(pin) else LOW

    def write_pin(self, pin, level):
        GPIO.output(pin, GPIO.HIGH if level else GPIO.LOW)

    def on_edge(self, pin, callback):
        # RPi.GPIO refuses a second detector on the same pin
        GPIO.remove_event_detect(pin)
        if callback is not None:
            GPIO.add_event_detect(pin, GPIO.RISING, callback=callback, bouncetime=EDGE_BOUNCE_MS)

    def release_pin(self, pin):
        GPIO.cleanup(pin)

    def cleanup(self):
        logger.info("[GPIO] Cleanup")
        GPIO.cleanup()
