# hardware/pins.py
"""
File: pins.py
Description:
  Pin direction, pull and level names shared by the GPIO adapter and the
  components that drive pins through it.
"""

INPUT = "in"
OUTPUT = "out"
PULL_UP = "up"
PULL_DOWN = "down"
PULL_NONE = None
HIGH = 1
LOW = 0
