"""
Month universe - the set of contract month codes a product rolls through.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from instrument_data.errors import MonthUniverseError

EXACT = "exact"
SUBSTRING = "substring"

# A month letter followed by an optional year, e.g. 'H', 'F23', 'Z2024'.
# Anything between tokens is a separator.
_TOKEN = re.compile(r"[A-Za-z][0-9]*")


@dataclass(frozen=True)
class MonthUniverse:
    """
    Parsed month universe.

    With exact matching, 'F23G23H23' (or 'F23, G23-H23') holds the tokens F23,
    G23 and H23 and a month is a member only if it equals one of them, so 'F2'
    is rejected. Matching is case-sensitive. Substring matching keeps the
    legacy behaviour of scanning the raw text.
    """

    text: str
    tokens: FrozenSet[str] = field(default_factory=frozenset)
    match: str = EXACT

    @classmethod
    def parse(cls, text: Optional[str], match: str = EXACT) -> MonthUniverse:
        text = text or ""

        if match == SUBSTRING:
            return cls(text=text, match=SUBSTRING)
        if match != EXACT:
            raise MonthUniverseError(f"Unsupported month match mode: {match}")

        # text without any token is an empty universe
        return cls(text=text, tokens=frozenset(_TOKEN.findall(text)))

    def __contains__(self, month: object) -> bool:
        if not isinstance(month, str) or not month:
            return False
        if self.match == SUBSTRING:
            return month in self.text
        return month in self.tokens

    def __bool__(self) -> bool:
        if self.match == SUBSTRING:
            return bool(self.text)
        return bool(self.tokens)
