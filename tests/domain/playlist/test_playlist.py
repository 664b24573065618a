"""Tests for the playlist engine."""

import random

import pytest

from sksonic.domain.playlist import INITIAL_CAPACITY, Playlist, ShuffleRepeatMode


def _filled(count: int) -> Playlist:
    playlist = Playlist()
    for i in range(count):
        playlist.add(f"s{i}")
    return playlist


class TestGrowth:
    """Tests for amortized growth on insert."""

    def test_initial_state(self) -> None:
        playlist = Playlist()
        assert playlist.capacity == INITIAL_CAPACITY == 10
        assert playlist.size == 0
        assert playlist.selected_index == -1

    def test_full_insert_doubles_once(self) -> None:
        """Adding to a full playlist doubles capacity exactly once."""
        playlist = _filled(10)
        assert playlist.capacity == 10
        playlist.add("extra")
        assert playlist.capacity == 20
        assert playlist.size == 11
        assert playlist.entries[-1] == "extra"

    def test_first_add_selects_it(self) -> None:
        playlist = Playlist()
        assert playlist.add("x") == 0
        assert playlist.selected_index == 0


class TestRemoval:
    """Tests for single and bulk removal."""

    def test_shrinks_once_below_quarter(self) -> None:
        """From capacity 20, going down to size 4 halves once to 10."""
        playlist = _filled(11)
        playlist.select_first()
        capacities = []
        while playlist.size > 4:
            playlist.remove_selected()
            capacities.append(playlist.capacity)
        assert playlist.capacity == 10
        assert capacities.count(10) == 1
        assert capacities[:-1] == [20] * (len(capacities) - 1)

    def test_never_below_floor(self) -> None:
        playlist = _filled(3)
        playlist.remove_all()
        assert playlist.capacity == 10

    def test_keeps_order(self) -> None:
        playlist = _filled(4)
        playlist.select(1)
        assert playlist.remove_selected() == "s1"
        assert playlist.entries == ["s0", "s2", "s3"]
        assert playlist.selected_index == 1

    def test_removing_last_entry_moves_selection_back(self) -> None:
        playlist = _filled(3)
        playlist.select_last()
        playlist.remove_selected()
        assert playlist.selected_index == 1

    def test_removing_only_entry_clears_selection(self) -> None:
        playlist = _filled(1)
        playlist.remove_selected()
        assert playlist.size == 0
        assert playlist.selected_index == -1

    def test_noop_without_selection(self) -> None:
        playlist = Playlist()
        assert playlist.remove_selected() is None
        assert playlist.size == 0

    def test_removing_current_calls_hook(self) -> None:
        playlist = _filled(3)
        playlist.current_index = 1
        playlist.select(1)
        calls = []
        playlist.remove_selected(lambda: calls.append("stop"))
        assert calls == ["stop"]

    def test_removing_other_entry_skips_hook(self) -> None:
        playlist = _filled(3)
        playlist.current_index = 2
        playlist.select(0)
        calls = []
        playlist.remove_selected(lambda: calls.append("stop"))
        assert calls == []
        # current entry keeps pointing at the same song
        assert playlist.song_id_at(playlist.current_index) == "s2"

    def test_remove_all_stops_playback(self) -> None:
        playlist = _filled(5)
        playlist.current_index = 3
        calls = []
        assert playlist.remove_all(lambda: calls.append("stop")) == 5
        assert calls
        assert playlist.size == 0
        assert playlist.selected_index == -1


class TestModes:
    """Tests for shuffle/repeat toggles and advance()."""

    def test_toggles_are_exclusive(self) -> None:
        playlist = Playlist()
        assert playlist.toggle_shuffle() is ShuffleRepeatMode.SHUFFLE
        assert playlist.toggle_repeat() is ShuffleRepeatMode.REPEAT
        assert playlist.toggle_repeat() is ShuffleRepeatMode.NONE
        assert playlist.toggle_shuffle() is ShuffleRepeatMode.SHUFFLE
        assert playlist.toggle_shuffle() is ShuffleRepeatMode.NONE

    def test_none_advances_then_stops(self) -> None:
        playlist = _filled(2)
        assert playlist.advance() == 1
        assert playlist.advance() is None
        assert playlist.current_index == 1

    def test_repeat_keeps_index(self) -> None:
        playlist = _filled(3)
        playlist.current_index = 1
        playlist.toggle_repeat()
        assert playlist.advance() == 1

    def test_shuffle_single_entry(self) -> None:
        playlist = _filled(1)
        playlist.toggle_shuffle()
        for _ in range(5):
            assert playlist.advance() == 0

    def test_shuffle_stays_in_range(self) -> None:
        playlist = _filled(4)
        playlist.toggle_shuffle()
        rng = random.Random(7)
        for _ in range(50):
            assert 0 <= playlist.advance(rng) < 4

    def test_advance_on_empty(self) -> None:
        assert Playlist().advance() is None


class TestSelection:
    """Tests for cursor movement."""

    @pytest.mark.parametrize("delta, expected", [(-5, 0), (1, 2), (10, 4)])
    def test_move_is_clamped(self, delta: int, expected: int) -> None:
        playlist = _filled(5)
        playlist.select(1)
        playlist.move_selection(delta)
        assert playlist.selected_index == expected

    def test_select_invalid_index_ignored(self) -> None:
        playlist = _filled(2)
        playlist.select(5)
        assert playlist.selected_index == 0


class TestScenario:
    """End-to-end add/remove walk through growth and shrink."""

    def test_grow_then_shrink_to_empty(self) -> None:
        playlist = Playlist()
        playlist.add("X")
        assert (playlist.capacity, playlist.size, playlist.selected_index) == (10, 1, 0)

        for i in range(9):
            playlist.add(f"s{i}")
        assert (playlist.capacity, playlist.size) == (10, 10)

        playlist.add("last")
        assert (playlist.capacity, playlist.size) == (20, 11)

        for _ in range(8):
            playlist.remove_selected()
        assert (playlist.capacity, playlist.size) == (10, 3)

        for _ in range(3):
            playlist.remove_selected()
        assert playlist.size == 0
        assert playlist.selected_index == -1
        assert playlist.capacity == 10
