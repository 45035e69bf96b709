# streamlit/session.py
import logging
from typing import Optional

import streamlit as st

from agrorain import config
from agrorain.actions import initial_state, refresh
from agrorain.state import AppState
from agrorain.stores import Backend, open_backend

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
log = logging.getLogger("agrorain.ui")

STATE_KEY = "agrorain_state"
SUBS_KEY = "agrorain_subscriptions"


# ===== Backend (once per process) =====
@st.cache_resource(show_spinner="Conectando ao banco de dados…")
def get_backend() -> Backend:
    backend = open_backend()
    log.info("backend selected: %s", backend.mode)
    return backend


# ===== Subscriptions (one pair per browser session) =====
def _subscriptions(backend: Backend):
    subs = st.session_state.get(SUBS_KEY)
    if subs is None:
        subs = (backend.gauges.watch_gauges(), backend.records.watch_records())
        st.session_state[SUBS_KEY] = subs
    return subs


# ===== State =====
def _stored_state() -> Optional[AppState]:
    return st.session_state.get(STATE_KEY)


def set_state(state: AppState) -> None:
    st.session_state[STATE_KEY] = state


def get_state() -> AppState:
    backend = get_backend()
    state = _stored_state()
    if state is None:
        state = initial_state(backend)
    elif backend.gauges.live_updates:
        # after the first load, live_updates() does the polling
        return state
    state, _ = refresh(state, *_subscriptions(backend))
    set_state(state)
    return state


@st.fragment(run_every=config.POLL_SECONDS)
def _poll_remote() -> None:
    backend = get_backend()
    state = _stored_state() or initial_state(backend)
    new_state, changed = refresh(state, *_subscriptions(backend))
    if changed:
        set_state(new_state)
        st.rerun()


def live_updates() -> None:
    """Polls the remote stores every few seconds and reruns the page on change."""
    if get_backend().gauges.live_updates:
        _poll_remote()


def reload_button(label: str = "🔄 Recarregar") -> None:
    col_btn, _ = st.columns([1, 5])
    if col_btn.button(label):
        for sub in st.session_state.get(SUBS_KEY) or ():
            sub.restart()
        st.session_state.pop(STATE_KEY, None)
        st.rerun()


# ===== Banner =====
def render_banner(state: AppState) -> None:
    if state.mode == "local":
        st.warning(f"**Modo Offline / Demonstração**  \n{state.notice or ''}", icon="💾")
    elif state.connection_error:
        st.error(f"**Erro de Conexão**  \n{state.connection_error}", icon="⚠️")


# ===== Flash messages (survive one st.rerun) =====
FLASH_KEY = "agrorain_flash"


def flash(message: str) -> None:
    st.session_state[FLASH_KEY] = message


def show_flash() -> None:
    message = st.session_state.pop(FLASH_KEY, None)
    if message:
        st.success(message, icon="✅")
