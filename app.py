import logging
import time
from typing import Any, List

import streamlit as st

from memory_game import PAIR_COUNT_CHOICES, GameSession, get_config

config = get_config()

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

HIDDEN_FACE = "❓"
REFRESH_SECONDS = 0.1

# --------------- Utilities ---------------

def _acknowledge_reset(game: GameSession) -> None:
    st.session_state.reset_banner_until = time.monotonic() + config.reset_banner_seconds
    logger.info("Reset acknowledged (generation %d)", game.generation)


def _init_state():
    ss = st.session_state
    ss.setdefault("pair_count", config.default_pair_count)
    ss.setdefault("cols", config.columns)
    ss.setdefault("size_px", 48)               # font size of a card face
    ss.setdefault("reset_banner_until", 0.0)
    if "game" not in ss:
        game = GameSession(ss.pair_count, flip_back_delay=config.flip_back_delay)
        game.subscribe_reset(_acknowledge_reset)
        ss.game = game


def _chunk(lst: List[Any], n: int) -> List[List[Any]]:
    '''Split iterable into consecutive chunks of size n.'''
    return [lst[i:i+n] for i in range(0, len(lst), n)]


def _pair_count_options() -> List[int]:
    return sorted(set(PAIR_COUNT_CHOICES) | {config.default_pair_count})


# --------------- Callbacks ---------------

def _on_card_click(index: int):
    st.session_state.game.select_card(index)


def _on_pair_count_change():
    st.session_state.game.new_game(st.session_state.pair_count)


def _on_reset():
    st.session_state.game.reset()


# --------------- Sidebar ---------------

def view_sidebar(game: GameSession):
    st.sidebar.header("Einstellungen")
    st.sidebar.radio(
        "Anzahl Paare",
        _pair_count_options(),
        key="pair_count",
        on_change=_on_pair_count_change,
        horizontal=True,
    )
    st.session_state.cols = st.sidebar.slider("Spalten", min_value=2, max_value=8, value=st.session_state.cols, step=1)
    st.session_state.size_px = st.sidebar.slider("Kartengröße (px)", min_value=24, max_value=120, value=st.session_state.size_px, step=4)

    st.sidebar.markdown("---")
    st.sidebar.header("Spiel-Aktionen")
    st.sidebar.button("🔄 Neue Mischung", key="reset", on_click=_on_reset)

    st.sidebar.markdown("---")
    st.sidebar.header("Spiel-Info")
    st.sidebar.metric("Karten gesamt", game.cards_total)
    st.sidebar.metric("Gefundene Paare", f"{game.pairs_found}/{game.pair_count}")
    st.sidebar.metric("Züge", game.moves)


# --------------- Stage: Play ---------------

def view_play(game: GameSession):
    st.title("🧠 Memory Spiel")
    st.caption("Decke zwei Karten auf und finde alle Paare!")

    st.markdown(
        f"""
        <style>
        div.stButton > button {{
            font-size: {st.session_state.size_px}px !important;
            width: 100%;
        }}
        </style>
        """,
        unsafe_allow_html=True,
    )

    if time.monotonic() < st.session_state.reset_banner_until:
        st.info("Neues Spiel gemischt!")

    st.progress(game.pairs_found / game.pair_count, text=f"Fortschritt: {game.pairs_found}/{game.pair_count} Paare gefunden")

    cols_count = st.session_state.cols
    for row_idx, row in enumerate(_chunk(game.snapshot(), cols_count)):
        columns = st.columns(cols_count)
        for offset, card in enumerate(row):
            index = row_idx * cols_count + offset
            with columns[offset]:
                st.button(
                    card.content if card.content is not None else HIDDEN_FACE,
                    key=f"card_{index}",
                    on_click=_on_card_click,
                    args=(index,),
                    disabled=card.is_matched,
                    type="primary" if card.is_pending else "secondary",
                )


# --------------- Stage: Win ---------------

def view_win(game: GameSession):
    st.success(f"✅ Alle Paare gefunden! ({game.moves} Züge)")
    st.balloons()
    st.button("🔄 Nochmal spielen", key="play_again", on_click=_on_reset)


# --------------- App Entrypoint ---------------

def _refresh_if_waiting(game: GameSession):
    '''Rerun shortly while a flip-back or the reset banner is outstanding.'''
    banner_active = time.monotonic() < st.session_state.reset_banner_until
    if game.has_pending_flip_backs or banner_active:
        time.sleep(REFRESH_SECONDS)
        st.rerun()


def main():
    st.set_page_config(
        page_title="Memory Spiel",
        page_icon="🧠",
        layout="wide",
        initial_sidebar_state="expanded"
    )

    _init_state()
    game = st.session_state.game
    game.tick()

    view_sidebar(game)
    view_play(game)
    if game.is_complete:
        view_win(game)

    _refresh_if_waiting(game)


if __name__ == "__main__":
    main()
