#!/usr/bin/env python
# main.py
"""
File: main.py
Description:
  Entry point for the Garage Keypad Access Controller.
  Loads the configuration, wires the keypad, access controller, relay and SMS
  alerts together and runs the event loop until interrupted.
"""

import logging
import os
import signal
import sys
from concurrent.futures import ThreadPoolExecutor
from logging.handlers import TimedRotatingFileHandler

from access.controller import AccessController
from config.constants import CONFIG_PATH, LOG_DIR, LOG_FILE
from config.loader import load_config, ConfigError
from hardware.gpio import RpiGpio
from keypad.accumulator import EntryAccumulator
from keypad.scanner import KeypadScanner
from notify.sms import build_notifier
from relay.controller import RelayController
from relay.door_sensor import DoorSensor
from utils.dispatcher import EventDispatcher
from utils.startup_check import startup_sequence

# Setup logging
os.makedirs(LOG_DIR, exist_ok=True)
handler = TimedRotatingFileHandler(
    LOG_FILE, when="D", interval=1, backupCount=7
)
formatter = logging.Formatter(
    '[%(asctime)s] %(levelname)s [%(name)s]: %(message)s',
    datefmt="%Y-%m-%d %H:%M:%S"
)
handler.setFormatter(formatter)
console = logging.StreamHandler()
console.setFormatter(formatter)
logging.basicConfig(level=logging.INFO, handlers=[handler, console])

logger = logging.getLogger("main")


def main():
    try:
        settings, registry = load_config(CONFIG_PATH)
    except ConfigError as e:
        logger.error(f"[CONFIG] {e}")
        sys.exit(1)

    gpio = RpiGpio()
    dispatcher = EventDispatcher()
    executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="sms")
    notifier = build_notifier(settings, executor=executor)

    sensor = DoorSensor(gpio, settings.sensor_pin)
    relay = RelayController(gpio, settings.relay_pin, settings.relay_delay_msec, scheduler=dispatcher)
    controller = AccessController(registry, settings, relay, sensor, notifier, scheduler=dispatcher)
    accumulator = EntryAccumulator(controller, settings.timeout_msec, settings.close_helper_key)
    scanner = KeypadScanner(
        gpio, settings.rows, settings.cols,
        on_symbol=lambda symbol: dispatcher.post(accumulator.receive, symbol),
    )

    def exit_handler(sig, frame):
        logger.info("[MAIN] Shutting down...")
        dispatcher.stop()

    signal.signal(signal.SIGINT, exit_handler)
    signal.signal(signal.SIGTERM, exit_handler)

    try:
        startup_sequence(settings, registry, relay, sensor, scanner, notifier)
        if settings.temp_code_purge_minutes > 0:
            dispatcher.call_later(settings.temp_code_purge_minutes * 60, controller.purge_expired)
        dispatcher.run_forever()
    finally:
        scanner.stop()
        relay.turn_off()
        gpio.cleanup()
        executor.shutdown(wait=False)


if __name__ == "__main__":
    main()
