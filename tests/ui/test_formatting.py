"""Tests for pure formatting and scrolling helpers."""

import pytest

from sksonic.ui.blessed.helpers.scrolling import calculate_scroll_offset
from sksonic.ui.blessed.styles.formatting import create_progress_bar, format_time


class TestFormatTime:
    @pytest.mark.parametrize(
        "seconds, expected",
        [(0, "0:00"), (59.9, "0:59"), (61, "1:01"), (3600, "60:00"), (-3, "0:00")],
    )
    def test_format(self, seconds: float, expected: str) -> None:
        assert format_time(seconds) == expected


class TestProgressBar:
    def test_half(self) -> None:
        assert create_progress_bar(50, 100, 10) == "#####-----"

    def test_clamped_when_over(self) -> None:
        assert create_progress_bar(500, 100, 4, played="=", unplayed=".") == "===="

    def test_unknown_duration(self) -> None:
        assert create_progress_bar(10, 0, 5) == "-----"

    def test_no_room(self) -> None:
        assert create_progress_bar(10, 100, 0) == ""


class TestScrollOffset:
    def test_scrolls_down(self) -> None:
        assert calculate_scroll_offset(15, 0, 10, 20) == 6

    def test_scrolls_up(self) -> None:
        assert calculate_scroll_offset(2, 10, 10, 20) == 2

    def test_unchanged_inside_viewport(self) -> None:
        assert calculate_scroll_offset(5, 3, 10, 20) == 3

    def test_short_list_never_scrolls(self) -> None:
        assert calculate_scroll_offset(4, 2, 10, 5) == 0

    def test_empty_selection(self) -> None:
        assert calculate_scroll_offset(-1, 4, 10, 20) == 0
