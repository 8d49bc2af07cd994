"""Turn control buttons — Draw, Higher, Lower, Pass."""

from __future__ import annotations

import streamlit as st

from src.ui.presenter import TableView


def render_turn_controls(view: TableView) -> str | None:
    """Render the buttons that fit the current turn.

    Returns:
        ``"draw"``, ``"higher"``, ``"lower"``, ``"pass"``, or ``None`` if no
        action was taken.
    """
    if view.is_game_over:
        return None

    if view.is_resolving:
        st.caption("Checking the guess...")
        return None

    if view.can_draw:
        if st.button("Draw a card", key="btn_draw", use_container_width=True, type="primary"):
            return "draw"
        if view.guess_info:
            st.caption(view.guess_info)
        return None

    cols = st.columns(3)
    with cols[0]:
        if st.button("Higher", key="btn_higher", use_container_width=True,
                     disabled=not view.can_guess, type="primary"):
            return "higher"
    with cols[1]:
        if st.button("Lower", key="btn_lower", use_container_width=True,
                     disabled=not view.can_guess, type="primary"):
            return "lower"
    with cols[2]:
        if st.button("Pass", key="btn_pass", use_container_width=True,
                     disabled=not view.can_pass):
            return "pass"

    if not view.can_pass:
        st.caption("Three guesses in a row: no passing this time.")
    return None
