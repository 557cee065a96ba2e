# relay/door_sensor.py
"""
File: door_sensor.py
Description:
  Magnetic contact on the door. The pin is pulled up and reads low once the
  contact separates, so a low level means the door is open.
"""

import logging
from hardware.pins import INPUT, PULL_UP

logger = logging.getLogger("sensor")


class DoorSensor:
    def __init__(self, gpio, pin):
        self.gpio = gpio
        self.pin = pin

    def setup(self):
        self.gpio.configure_pin(self.pin, INPUT, PULL_UP)

    def is_door_open(self):
        is_open = not self.gpio.read_pin(self.pin)
        logger.info(f"[SENSOR] Door state = {'OPENED' if is_open else 'CLOSED'}")
        return is_open
