# access/entry.py
"""
File: entry.py
Description:
  Registry records for the keypad controller.
  An Entry maps a keypad code to a named identity, its alert group and its
  access schedule. A TemporaryEntry is issued at runtime and expires.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, FrozenSet, Tuple


@dataclass(eq=False)
class Entry:
    name: str
    code: str
    alert: Optional[str] = None
    message: Optional[str] = None
    valid_days: Optional[FrozenSet[str]] = None
    valid_hours: Optional[Tuple[int, int]] = None
    temp_code_allowed: bool = False
    testmode: bool = False
    last_temp_code_issued_at: Optional[datetime] = field(default=None, compare=False)

    def is_live(self, now):
        return True


@dataclass(eq=False)
class TemporaryEntry(Entry):
    expires_at: Optional[datetime] = None
    parent: Optional[Entry] = field(default=None, repr=False)

    @classmethod
    def issued_for(cls, parent, code, expires_at):
        return cls(
            name=f"Temp entry for {parent.name}",
            code=code,
            alert=parent.alert,
            expires_at=expires_at,
            parent=parent,
        )

    def is_live(self, now):
        # honored strictly before the expiry timestamp
        return self.expires_at is None or now < self.expires_at
