# access/temp_codes.py
"""
File: temp_codes.py
Description:
  Temporary code issuance for entries that were denied by their schedule.
  A fresh code goes to the entry's alert group, who decide whether to share
  it. Issuance is rate limited per entry and every code expires.
"""

import logging
import random
from datetime import timedelta

from access.entry import TemporaryEntry
from config.constants import TEMP_CODE_LENGTH, TEMP_CODE_ALPHABET

logger = logging.getLogger("access")

_rng = random.SystemRandom()


def gen_code(n=TEMP_CODE_LENGTH, alphabet=TEMP_CODE_ALPHABET):
    return "".join(_rng.choice(alphabet) for _ in range(n))


class TempCodeIssuer:
    def __init__(self, min_interval_seconds, ttl_minutes, generator=gen_code):
        self.min_interval = timedelta(seconds=min_interval_seconds)
        self.ttl = timedelta(minutes=ttl_minutes)
        self.ttl_minutes = ttl_minutes
        self.generator = generator

    def issue(self, entry, now):
        """Return a new TemporaryEntry for entry, or None when rate limited."""
        logger.info(f"[TEMPCODE] Creating temporary code for {entry.name}...")

        last = entry.last_temp_code_issued_at
        if last is not None and now - last < self.min_interval:
            logger.info(
                f"[TEMPCODE] Less than {int(self.min_interval.total_seconds())} seconds "
                f"since last code for {entry.name}; ignoring."
            )
            return None

        entry.last_temp_code_issued_at = now
        # collisions with existing codes are not checked
        temp = TemporaryEntry.issued_for(entry, self.generator(), now + self.ttl)
        logger.info(f"[TEMPCODE] Temporary code {temp.code} for {entry.name} will expire {temp.expires_at}")
        return temp
