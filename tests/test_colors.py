"""Tests for lyrictype.ui.colors – palette and state color maps."""

from __future__ import annotations

import re

from lyrictype.core.session import CharState, LineState
from lyrictype.ui.colors import CHAR_COLORS, LINE_COLORS, Palette

HEX = re.compile(r"^#[0-9a-fA-F]{6}$")


# ===========================================================================
# Palette – constants exist
# ===========================================================================

class TestPalette:
    def test_bg_top_is_hex(self):
        assert HEX.match(Palette.BG_TOP)

    def test_card_bg_is_rgba(self):
        assert Palette.CARD_BG.startswith("rgba(")

    def test_success_muted_is_hex(self):
        assert HEX.match(Palette.SUCCESS_MUTED)


# ===========================================================================
# State color maps
# ===========================================================================

class TestStateColors:
    def test_every_line_state_has_color(self):
        assert set(LINE_COLORS) == set(LineState)

    def test_every_char_state_has_color(self):
        assert set(CHAR_COLORS) == set(CharState)

    def test_line_colors_are_hex(self):
        for color in LINE_COLORS.values():
            assert HEX.match(color)

    def test_completed_lines_distinct_from_pending(self):
        assert LINE_COLORS[LineState.COMPLETED] != LINE_COLORS[LineState.PENDING]

    def test_completed_lines_distinct_from_correct_chars(self):
        assert LINE_COLORS[LineState.COMPLETED] != CHAR_COLORS[CharState.CORRECT]

    def test_correct_and_incorrect_differ(self):
        assert CHAR_COLORS[CharState.CORRECT] != CHAR_COLORS[CharState.INCORRECT]
