"""Theme colors for the UI and the line and character state color maps."""

from lyrictype.core.session import CharState, LineState


class Palette:
    """Light glass theme shared by the search and game screens."""

    BG_TOP = "#e8eaf6"
    BG_BOTTOM = "#c5cae9"

    PRIMARY = "#3949ab"
    PRIMARY_LIGHT = "#6f74dd"
    PRIMARY_DARK = "#00227b"

    CARD_BG = "rgba(255, 255, 255, 0.85)"
    CARD_BORDER = "rgba(255, 255, 255, 0.6)"

    TEXT_PRIMARY = "#1a237e"
    TEXT_SECONDARY = "#4a5572"
    TEXT_MUTED = "#90a4ae"

    SUCCESS = "#2e7d32"
    # Completed lines: SUCCESS washed toward TEXT_MUTED.
    SUCCESS_MUTED = "#558c63"
    ERROR = "#c62828"
    ERROR_BG = "#ffebee"
    NOTICE = "#ef6c00"


LINE_COLORS = {
    LineState.COMPLETED: Palette.SUCCESS_MUTED,
    LineState.ACTIVE: Palette.TEXT_PRIMARY,
    LineState.PENDING: Palette.TEXT_MUTED,
}

CHAR_COLORS = {
    CharState.NEUTRAL: Palette.TEXT_PRIMARY,
    CharState.CORRECT: Palette.SUCCESS,
    CharState.INCORRECT: Palette.ERROR,
}
