# notify/sms.py
"""
File: sms.py
Description:
  SMS alerts through the Twilio REST API.
  Messages are addressed to alert groups; each group maps to a list of phone
  numbers in config.json. Delivery is best effort: failures are logged and
  never reach the access controller.
"""

import logging
import requests

from config.constants import TWILIO_API_URL, SMS_COUNTRY_PREFIX, SMS_TIMEOUT, SUPPORT_ALERT_GROUP

logger = logging.getLogger("notify")


class SmsNotifier:
    def __init__(self, alerts, account_sid, auth_token, from_number,
                 country_prefix=SMS_COUNTRY_PREFIX, executor=None, session=None):
        self.alerts = alerts
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number
        self.country_prefix = country_prefix
        self.executor = executor
        self.session = session or requests.Session()

    def send(self, alert_group, message):
        if not message:
            logger.info("[NOTIFY] No message specified; ignoring")
            return

        numbers = self.alerts.get(alert_group) or []
        if not numbers:
            logger.info(f"[NOTIFY] No SMS numbers for alert group {alert_group}; ignoring.")
            return

        for number in numbers:
            if self.executor is not None:
                future = self.executor.submit(self.send_to_number, number, message)
                future.add_done_callback(_log_delivery_error)
            else:
                self.send_to_number(number, message)

    def send_support(self, message):
        self.send(SUPPORT_ALERT_GROUP, message)

    def send_to_number(self, number, message):
        to = number if str(number).startswith("+") else f"{self.country_prefix}{number}"
        try:
            resp = self.session.post(
                TWILIO_API_URL.format(sid=self.account_sid),
                data={"To": to, "From": self.from_number, "Body": message},
                auth=(self.account_sid, self.auth_token),
                timeout=SMS_TIMEOUT,
            )
            resp.raise_for_status()
            sid = resp.json().get("sid")
        except requests.RequestException as e:
            logger.error(f"[NOTIFY] SMS to {to} failed: {e}")
            return False

        logger.info(f"[NOTIFY] SMS sent to {to}, SID: {sid}")
        return True


def _log_delivery_error(future):
    if future.cancelled():
        return
    error = future.exception()
    if error is not None:
        logger.error(f"[NOTIFY] SMS delivery crashed: {error!r}")


class NullNotifier:
    """Used when no Twilio account is configured."""

    def send(self, alert_group, message):
        logger.info(f"[NOTIFY] SMS disabled; dropped message for {alert_group}: {message}")

    def send_support(self, message):
        self.send(SUPPORT_ALERT_GROUP, message)


def build_notifier(settings, executor=None):
    twilio = settings.twilio
    if not twilio.get("account_sid") or not twilio.get("auth_token") or not twilio.get("my_number"):
        logger.warning("[NOTIFY] Twilio configuration not found")
        return NullNotifier()

    logger.info(f"[NOTIFY] Configuring Twilio for SMS alerts (account {twilio['account_sid']})")
    return SmsNotifier(
        settings.alerts, twilio["account_sid"], twilio["auth_token"], twilio["my_number"],
        executor=executor,
    )
