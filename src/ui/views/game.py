"""Game page — the table, its controls and the reset prompt."""

from __future__ import annotations

import logging

import streamlit as st

from src.channel.events import EventPayload, GameEvent
from src.config.settings import get_settings
from src.database.client import get_game_store
from src.session.manager import GameSession
from src.ui.components import render_deck_area, render_scoreboard, render_turn_controls
from src.ui.presenter import build_table_view

logger = logging.getLogger(__name__)


def _get_session() -> GameSession:
    """One GameSession per browser session."""
    ss = st.session_state
    if "session" not in ss:
        settings = get_settings()
        session = GameSession(
            get_game_store(settings),
            timing=settings.timing(),
            seed=settings.shuffle_seed,
        )
        ss["_notices"] = []
        session.channel.subscribe(GameEvent.GUESS_RESULT, _queue_notice)
        session.channel.subscribe(GameEvent.INVALID_MOVE, _queue_notice)
        session.channel.subscribe(GameEvent.GAME_OVER, _queue_notice)
        logger.info("Opening game session (storage: %s)", settings.storage_backend)
        session.start()
        ss["session"] = session
    return ss["session"]


def _queue_notice(payload: EventPayload) -> None:
    st.session_state.setdefault("_notices", []).append(payload)


def _show_notices() -> None:
    notices = st.session_state.get("_notices", [])
    st.session_state["_notices"] = []
    for payload in notices:
        if payload.event is GameEvent.GUESS_RESULT:
            icon = "✅" if payload.data.get("correct") else "❌"
            st.toast(payload.data["message"], icon=icon)
        elif payload.event is GameEvent.INVALID_MOVE:
            st.warning(payload.data["message"])
        elif payload.event is GameEvent.GAME_OVER:
            st.info("Game over! That was the last card.")


def _render_reset_prompt(session: GameSession) -> None:
    st.error(session.error_message or "There was a problem with your game.")
    cols = st.columns(2)
    with cols[0]:
        if st.button("Start a new game", key="btn_reset", type="primary"):
            session.confirm_reset(True)
            st.rerun()
    with cols[1]:
        if st.button("Cancel", key="btn_cancel_reset"):
            session.error_message = None
            st.rerun()


@st.fragment(run_every=0.25)
def _tick_scheduler() -> None:
    """Run deferred guess continuations and redraw when one fires."""
    session = st.session_state.get("session")
    if session is not None and session.tick():
        st.rerun(scope="app")


def render_game_page() -> None:
    session = _get_session()

    if session.error_message:
        _render_reset_prompt(session)
        if session.engine is None:
            return

    engine = session.engine
    if engine is None:
        return

    view = build_table_view(engine)
    st.subheader(view.headline)
    st.write(view.instruction)
    _show_notices()

    render_deck_area(view)
    action = render_turn_controls(view)
    render_scoreboard(view.players)

    if action == "draw":
        session.request_draw()
        st.rerun()
    elif action in ("higher", "lower"):
        session.submit_guess(action)
        st.rerun()
    elif action == "pass":
        session.pass_turn()
        st.rerun()

    if view.is_game_over and st.button("New game", key="btn_new_game"):
        session.confirm_reset(True)
        st.rerun()

    _tick_scheduler()
