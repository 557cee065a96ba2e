# access/registry.py
"""
File: registry.py
Description:
  In-memory entry registry. Holds the entries loaded from config.json plus any
  temporary entries issued while the controller runs. Nothing is persisted:
  temporary entries are gone after a restart.
"""

import logging

from access.entry import TemporaryEntry

logger = logging.getLogger("access")


class EntryRegistry:
    def __init__(self, entries=None):
        self.entries = list(entries or [])

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def find(self, code, now):
        """Return the first live entry whose code matches, in insertion order.

        Codes are not required to be unique. An expired temporary entry is
        skipped so a later entry with the same code can still match.
        """
        for entry in self.entries:
            if entry.code != code:
                continue
            if not entry.is_live(now):
                logger.info(f"[ACCESS] {entry.name} EXPIRED")
                continue
            return entry
        return None

    def add(self, entry):
        self.entries.append(entry)

    def purge_expired(self, now):
        kept = [e for e in self.entries if not isinstance(e, TemporaryEntry) or e.is_live(now)]
        removed = len(self.entries) - len(kept)
        self.entries = kept
        if removed:
            logger.info(f"[ACCESS] Purged {removed} expired temporary entries")
        return removed
