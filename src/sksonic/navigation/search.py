"""
Incremental search over the names currently on screen.

Matching is a case-insensitive substring test. A fresh search scans from the
first item, next/previous scan onward from the last match. Searches never
wrap: running off either end leaves the previous match in place.
"""

from enum import Enum
from typing import Optional, Sequence

MAX_QUERY_LENGTH = 255


class SearchDirection(Enum):
    FRESH = "fresh"
    NEXT = "next"
    PREVIOUS = "previous"


class SearchEngine:
    """One search session: the query being typed and the last match."""

    def __init__(self) -> None:
        self.query = ""
        self.current_match = 0

    def reset(self) -> None:
        self.query = ""
        self.current_match = 0

    def append(self, char: str) -> None:
        """Add typed text; anything past MAX_QUERY_LENGTH is dropped."""
        room = MAX_QUERY_LENGTH - len(self.query)
        if room > 0:
            self.query += char[:room]

    def backspace(self) -> None:
        self.query = self.query[:-1]

    def search(
        self, names: Sequence[str], direction: SearchDirection = SearchDirection.FRESH
    ) -> Optional[int]:
        """Find the next item containing the query.

        Returns:
            Index of the match, or None (empty query, no items, no match)
        """
        if not self.query or not names:
            return None

        if direction is SearchDirection.NEXT:
            candidates = range(self.current_match + 1, len(names))
        elif direction is SearchDirection.PREVIOUS:
            candidates = range(min(self.current_match, len(names)) - 1, -1, -1)
        else:
            candidates = range(len(names))

        needle = self.query.casefold()
        for index in candidates:
            if needle in names[index].casefold():
                self.current_match = index
                return index
        return None
