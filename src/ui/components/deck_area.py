"""Deck area — points on the line, cards left and the discard pile."""

from __future__ import annotations

import streamlit as st

from src.ui.presenter import TableView


def render_deck_area(view: TableView) -> None:
    cols = st.columns(3)
    with cols[0]:
        st.metric("On the line", f"{view.points_value} {view.points_label}")
    with cols[1]:
        st.metric("Draw pile", view.cards_left)
    with cols[2]:
        st.metric("Discard pile", view.active_card.title() if view.active_card else "Empty")
