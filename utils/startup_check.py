# utils/startup_check.py
"""
File: startup_check.py
Description:
  One-time boot sequence for the keypad controller.
  Logs the loaded configuration, puts the relay, door sensor and keypad pins
  into their idle state, arms the keypad and tells the support group the
  controller is up.
"""

import logging
from config.constants import MESSAGES

logger = logging.getLogger("startup")

VERSION = "2.0"


def startup_sequence(settings, registry, relay, sensor, scanner, notifier):
    logger.info("------------------------------------------------------")
    logger.info(f"Garage Keypad Access Controller {VERSION}")
    logger.info("------------------------------------------------------")

    logger.info(f"[STEP] Keypad columns: {settings.cols}")
    logger.info(f"[STEP] Keypad rows: {settings.rows}")
    logger.info(f"[STEP] Relay pin: {settings.relay_pin}")
    logger.info(f"[STEP] Sensor pin: {settings.sensor_pin}")
    logger.info(f"[STEP] Timeout msec: {settings.timeout_msec}")
    logger.info(f"[STEP] Close helper threshold (sec): {settings.close_helper_seconds}")
    logger.info(f"[STEP] {len(registry)} entries loaded")

    relay.setup()
    sensor.setup()
    sensor.is_door_open()
    logger.info("[PASS] Relay and sensor pins configured.")

    scanner.setup()
    logger.info("[PASS] Keypad armed. Listening...")

    notifier.send_support(MESSAGES["startup"])
    return True
