# config/constants.py
"""
File: constants.py
Description:
  Central configuration defaults for the Garage Keypad Access Controller.
  Loads environment variables, names the config file location and holds the
  keypad layout and timing fallbacks used when config.json leaves them out.
"""

from dotenv import load_dotenv
load_dotenv()
import os

# === Config File ===
CONFIG_PATH = os.getenv("KEYPAD_CONFIG", "config/config.json")

# === Twilio Environment Variables ===
TWILIO_ENV_KEYS = {
    "account_sid": os.getenv("TWILIO_ACCOUNT_SID"),
    "auth_token": os.getenv("TWILIO_AUTH_TOKEN"),
    "my_number": os.getenv("TWILIO_FROM_NUMBER"),
}
TWILIO_API_URL = "https://api.twilio.com/2010-04-01/Accounts/{sid}/Messages.json"
SMS_COUNTRY_PREFIX = os.getenv("SMS_COUNTRY_PREFIX", "+1")
SMS_TIMEOUT = 10  # seconds
SUPPORT_ALERT_GROUP = "support"

# === Keypad Layout ===
KEYPAD_SYMBOLS = [
    ["1", "2", "3", "A"],
    ["4", "5", "6", "B"],
    ["7", "8", "9", "C"],
    ["*", "0", "#", "D"],
]
START_KEY = "*"
END_KEY = "#"
CLOSE_HELPER_KEY_DEFAULT = "C"

DAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

# === Timing Defaults ===
KEY_TIMEOUT_MSEC_DEFAULT = 5000
TESTMODE_TIMEOUT_MSEC_DEFAULT = 2 * 60 * 1000
RELAY_DELAY_MSEC_DEFAULT = 500
CLOSE_HELPER_SECONDS_DEFAULT = 90
TEMP_CODE_TIMEOUT_SECONDS_DEFAULT = 120
TEMP_CODE_TTL_MINUTES_DEFAULT = 30
TEMP_CODE_PURGE_MINUTES_DEFAULT = 0  # 0 keeps expired temp entries around
TEMP_CODE_LENGTH = 5
TEMP_CODE_ALPHABET = "0123456789"

# === Logging ===
LOG_DIR = "logs"
LOG_FILE = "logs/keypad.log"

# === Messages ===
MESSAGES = {
    "opened": "{name} has opened the door",
    "closed": "{name} has closed the door",
    "testmode_on": "Test mode ACTIVE",
    "testmode_off": "Test mode deactivated",
    "testmode_timeout": "Test mode deactivated after {seconds} seconds",
    "testmode_code": "Test Mode: code = {code}",
    "temp_code": (
        "A temporary code ({code}) has been created for {name}. "
        "If you wish to share it, it's valid for {minutes} minutes."
    ),
    "startup": "Keypad controller is now active!",
}
