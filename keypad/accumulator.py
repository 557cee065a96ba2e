# keypad/accumulator.py
"""
File: accumulator.py
Description:
  Turns keypad symbols into codes.
  '*' starts an entry, digits and letters are appended, '#' submits the code
  to the access controller. The close-helper key bypasses the buffer. A
  symbol that arrives too long after the previous one throws the partial
  entry away.
"""

import logging
from datetime import datetime, timedelta

from config.constants import START_KEY, END_KEY, CLOSE_HELPER_KEY_DEFAULT

logger = logging.getLogger("keypad")

IDLE = "IDLE"
ACCUMULATING = "ACCUMULATING"


class EntryAccumulator:
    def __init__(self, controller, timeout_msec, close_helper_key=CLOSE_HELPER_KEY_DEFAULT,
                 clock=datetime.now):
        self.controller = controller
        self.timeout = timedelta(milliseconds=timeout_msec)
        self.close_helper_key = close_helper_key
        self.clock = clock

        self.state = IDLE
        self.current_code = ""
        self.last_key_pressed_at = None

    def receive(self, symbol):
        now = self.clock()
        elapsed = now - self.last_key_pressed_at if self.last_key_pressed_at else timedelta(0)
        self.last_key_pressed_at = now

        if symbol == START_KEY:
            self.current_code = ""
            self.state = ACCUMULATING
        elif symbol == END_KEY:
            self._end_entry()
        elif symbol == self.close_helper_key:
            self.controller.close_helper()
        elif elapsed > self.timeout:
            logger.info(f"[KEYPAD] {symbol} pressed after {int(elapsed.total_seconds() * 1000)} msec (TOO LONG)")
            self._clear()
        else:
            self.current_code += symbol
            self.state = ACCUMULATING

        if self.state == IDLE:
            self.last_key_pressed_at = None

    def _end_entry(self):
        if not self.current_code:
            return

        code = self.current_code
        self._clear()
        logger.info(f"[KEYPAD] Code: {code}")
        self.controller.submit_code(code)

    def _clear(self):
        self.current_code = ""
        self.state = IDLE
