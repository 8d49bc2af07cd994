"""Scoreboard component — player scores, roles and turn indicator."""

from __future__ import annotations

import streamlit as st

from src.ui.presenter import PlayerLine


def render_scoreboard(players: tuple[PlayerLine, ...]) -> None:
    """Render the scoreboard panel."""
    html = ['<div class="scoreboard">']
    html.append('<div class="scoreboard-title">Scoreboard</div>')

    for player in players:
        row_classes = ["player-row"]
        if player.is_active:
            row_classes.append("active")

        indicator = "&#9654; " if player.is_active else ""

        html.append(
            f'<div class="{" ".join(row_classes)}">'
            f'<span class="name">{indicator}{player.name}</span>'
            f'<span class="role">{player.role}</span>'
            f'<span class="score">{player.score}</span>'
            f"</div>"
        )

    html.append("</div>")
    st.markdown("".join(html), unsafe_allow_html=True)
