# keypad/scanner.py
"""
File: scanner.py
Description:
  Reads the 4x4 matrix keypad.
  Idle: columns are driven high and rows are pulled-down inputs, so a press
  raises an edge on its row. The scanner then flips the matrix around (columns
  pulled-down inputs, pressed row pulled up) to find which column is connected,
  maps the pair to a symbol and puts the matrix back.
"""

import logging
import threading

from config.constants import KEYPAD_SYMBOLS
from hardware.pins import INPUT, OUTPUT, PULL_UP, PULL_DOWN, HIGH

logger = logging.getLogger("keypad")


class KeypadScanner:
    def __init__(self, gpio, rows, cols, on_symbol, symbols=KEYPAD_SYMBOLS):
        self.gpio = gpio
        self.rows = list(rows)
        self.cols = list(cols)
        self.on_symbol = on_symbol
        self.symbols = symbols
        self._busy = threading.Lock()

    def setup(self):
        self._idle_config()
        self._arm(True)

    def stop(self):
        self._arm(False)

    def handle_edge(self, pin):
        """Edge callback. Emits at most one symbol per press."""
        if not self._busy.acquire(blocking=False):
            return
        try:
            if not self.gpio.read_pin(pin):
                return
            symbol = self.resolve(pin)
        finally:
            self._busy.release()

        if symbol is not None:
            logger.debug(f"[KEYPAD] P{pin} -> {symbol}")
            self.on_symbol(symbol)

    def resolve(self, pin):
        self._arm(False)
        try:
            for col in self.cols:
                self.gpio.configure_pin(col, INPUT, PULL_DOWN)
            self.gpio.configure_pin(pin, INPUT, PULL_UP)

            row = self.get_row(pin)
            hits = [i + 1 for i, col in enumerate(self.cols) if self.gpio.read_pin(col)]
        finally:
            self._idle_config()
            self._arm(True)

        if row == 0 or len(hits) != 1:
            logger.debug(f"[KEYPAD] Unresolved scan on P{pin}: row={row} cols={hits}")
            return None
        return self.symbols[row - 1][hits[0] - 1]

    def get_row(self, pin):
        if pin in self.rows:
            return self.rows.index(pin) + 1
        return 0

    def _idle_config(self):
        for col in self.cols:
            self.gpio.configure_pin(col, OUTPUT, initial=HIGH)
        for row in self.rows:
            self.gpio.configure_pin(row, INPUT, PULL_DOWN)

    def _arm(self, active):
        # columns are outputs while idle and cannot raise edges
        for row in self.rows:
            self.gpio.on_edge(row, self.handle_edge if active else None)
