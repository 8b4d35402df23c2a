"""Rich-text rendering of the lyrics panel."""

from __future__ import annotations

import html
from typing import List

from lyrictype.core.session import CharState, GameSession, LineState
from lyrictype.ui.colors import CHAR_COLORS, LINE_COLORS, Palette


def _span(text: str, color: str, extra: str = "") -> str:
    return f'<span style="color:{color};{extra}">{html.escape(text)}</span>'


def render_active_line(line: str, feedback: List[CharState]) -> str:
    """Color each character of *line* by its feedback state, merging equal runs."""
    parts: List[str] = []
    run = ""
    run_state = None
    for ch, state in zip(line, feedback):
        if state is not run_state and run:
            parts.append(_char_run(run, run_state))
            run = ""
        run += ch
        run_state = state
    if run:
        parts.append(_char_run(run, run_state))
    return "".join(parts)


def _char_run(text: str, state: CharState) -> str:
    extra = "font-weight:600;"
    if state is CharState.INCORRECT:
        extra += f"background:{Palette.ERROR_BG};text-decoration:underline;"
    return _span(text, CHAR_COLORS[state], extra)


def render_lyrics_html(session: GameSession) -> str:
    """One ``<p>`` per lyric line; the active line gets per-character feedback."""
    lines = session.lines
    if not lines:
        return _span("No lyrics available for this song.", Palette.TEXT_MUTED)

    blocks = []
    for line, state in zip(lines, session.line_states()):
        if state is LineState.ACTIVE:
            body = render_active_line(line, session.char_feedback())
            blocks.append(f'<p align="center" style="font-size:22px;">{body}</p>')
        else:
            blocks.append(f'<p align="center">{_span(line, LINE_COLORS[state])}</p>')
    return "".join(blocks)
