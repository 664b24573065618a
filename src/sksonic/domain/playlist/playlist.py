"""
Playlist engine.

An ordered queue of song ids backed by an amortized-growth slot array:
capacity doubles when an insert finds it full and halves when occupancy drops
below a quarter, never going under MIN_CAPACITY. Entries are song ids, so a
playlist never holds references into catalog nodes; display data is resolved
through the catalog cache.
"""

import random
from enum import Enum
from typing import Callable, List, Optional

# Capacity of a new playlist and the floor it never shrinks below
INITIAL_CAPACITY = 10
MIN_CAPACITY = 10


class ShuffleRepeatMode(Enum):
    """Mutually exclusive playback order modes sharing one field."""

    NONE = "none"
    SHUFFLE = "shuffle"
    REPEAT = "repeat"


class Playlist:
    """Ordered, resizable song queue with a selection cursor.

    Attributes:
        size: Number of entries
        current_index: Index of the entry being (or last) played
        selected_index: Selection cursor, -1 if and only if the playlist is empty
        mode: Shuffle/repeat mode used by advance()
    """

    def __init__(
        self,
        capacity: int = INITIAL_CAPACITY,
        rng: Optional[random.Random] = None,
    ):
        self._slots: List[Optional[str]] = [None] * max(capacity, MIN_CAPACITY)
        self._rng = rng or random.Random()
        self.size = 0
        self.current_index = 0
        self.selected_index = -1
        self.mode = ShuffleRepeatMode.NONE

    def __len__(self) -> int:
        return self.size

    @property
    def capacity(self) -> int:
        return len(self._slots)

    @property
    def entries(self) -> List[str]:
        """Song ids in queue order."""
        return [song_id for song_id in self._slots[: self.size] if song_id is not None]

    def is_valid_index(self, index: int) -> bool:
        return 0 <= index < self.size

    def song_id_at(self, index: int) -> Optional[str]:
        if not self.is_valid_index(index):
            return None
        return self._slots[index]

    def add(self, song_id: str) -> int:
        """Append a song, doubling capacity first if the array is full.

        Returns:
            Index of the new entry
        """
        if self.size == self.capacity:
            self._slots.extend([None] * self.capacity)

        self._slots[self.size] = song_id
        self.size += 1

        if self.selected_index == -1:
            self.selected_index = 0
        return self.size - 1

    def remove_selected(
        self, on_remove_current: Optional[Callable[[], None]] = None
    ) -> Optional[str]:
        """Remove the selected entry.

        Args:
            on_remove_current: Called before removal when the selected entry is
                the current one (the playback controller passes its stop())

        Returns:
            The removed song id, or None if nothing was selected
        """
        index = self.selected_index
        if not self.is_valid_index(index):
            return None

        if index == self.current_index and on_remove_current is not None:
            on_remove_current()

        removed = self._slots[index]
        self._slots[index : self.size - 1] = self._slots[index + 1 : self.size]
        self._slots[self.size - 1] = None
        self.size -= 1

        # Keep current_index on the same entry when an earlier one goes away
        if index < self.current_index:
            self.current_index -= 1
        self.current_index = max(0, min(self.current_index, self.size - 1))

        if self.capacity > MIN_CAPACITY and self.size < self.capacity / 4:
            del self._slots[max(self.capacity // 2, MIN_CAPACITY) :]

        if self.size == 0:
            self.selected_index = -1
        elif index == self.size:
            # Removed the last entry: select the new last one
            self.selected_index = index - 1

        return removed

    def remove_all(self, on_remove_current: Optional[Callable[[], None]] = None) -> int:
        """Remove every entry one at a time, returning how many were removed."""
        removed = 0
        while self.size > 0:
            self.selected_index = min(max(self.selected_index, 0), self.size - 1)
            self.remove_selected(on_remove_current)
            removed += 1
        return removed

    def toggle_shuffle(self) -> ShuffleRepeatMode:
        if self.mode is ShuffleRepeatMode.SHUFFLE:
            self.mode = ShuffleRepeatMode.NONE
        else:
            self.mode = ShuffleRepeatMode.SHUFFLE
        return self.mode

    def toggle_repeat(self) -> ShuffleRepeatMode:
        if self.mode is ShuffleRepeatMode.REPEAT:
            self.mode = ShuffleRepeatMode.NONE
        else:
            self.mode = ShuffleRepeatMode.REPEAT
        return self.mode

    def advance(self, rng: Optional[random.Random] = None) -> Optional[int]:
        """Pick the entry to play after the current one finishes.

        NONE moves to the next entry and returns None at the end of the queue.
        SHUFFLE picks a uniformly random entry. REPEAT keeps the current one.

        Args:
            rng: Random source for SHUFFLE, defaults to the playlist's own

        Returns:
            The new current index, or None when playback should stop
        """
        if self.size == 0:
            return None

        if self.mode is ShuffleRepeatMode.SHUFFLE:
            self.current_index = (rng or self._rng).randrange(self.size)
        elif self.mode is ShuffleRepeatMode.NONE:
            if self.current_index >= self.size - 1:
                return None
            self.current_index += 1

        return self.current_index

    # Selection cursor

    def move_selection(self, delta: int) -> None:
        """Move the cursor by delta, clamped to the entries (no wraparound)."""
        if self.size == 0:
            return
        self.selected_index = max(0, min(self.selected_index + delta, self.size - 1))

    def select(self, index: int) -> None:
        if self.is_valid_index(index):
            self.selected_index = index

    def select_first(self) -> None:
        self.select(0)

    def select_last(self) -> None:
        self.select(self.size - 1)
