"""Hi-Lo — Streamlit Application Entrypoint."""

from __future__ import annotations

import streamlit as st

from src.config.settings import configure_logging


_RULES = """\
**Goal:** Collect points when your opponent's luck runs out.

- The **dealer** draws, the **guesser** calls **higher** or **lower**
- A first draw or a correct call adds **1 point** to the line
- A wrong call pays **every point on the line** to the guesser, and the pile is cleared
- Equal cards count as **lower**
- The guesser may **pass** to swap roles, but not after three calls in a row
- The game ends when one card is left in the pile
"""


def main() -> None:
    """Application entrypoint. Must call ``st.set_page_config`` first."""
    st.set_page_config(
        page_title="Hi-Lo",
        page_icon="🃏",
        layout="centered",
        initial_sidebar_state="collapsed",
    )
    configure_logging()

    st.title("Hi-Lo")
    from src.ui.views.game import render_game_page
    render_game_page()

    with st.sidebar:
        st.markdown("### Rules")
        st.markdown(_RULES)


if __name__ == "__main__":
    main()
