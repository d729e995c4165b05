from __future__ import annotations

import logging
from typing import Dict

import streamlit as st
from streamlit.errors import StreamlitAPIException

from .models import Priority
from .store import PersistentStore

logger = logging.getLogger(__name__)

DARK_MODE_KEY = "darkMode"
_TRUE = "true"
_FALSE = "false"


class PreferenceFlag:
    """Persisted dark-mode preference.

    Only the exact stored string ``"true"`` reads as dark mode; a missing
    key or any other value means light mode.
    """

    def __init__(self, store: PersistentStore, key: str = DARK_MODE_KEY):
        self.store = store
        self.key = key
        self._value = store.load(key) == _TRUE
        self._synced = True

    def refresh(self) -> None:
        """Re-read the stored value, which another session may have changed."""
        if not self._synced:
            return
        self._value = self.store.load(self.key) == _TRUE

    @property
    def value(self) -> bool:
        return self._value

    def __bool__(self) -> bool:
        return self._value

    def toggle(self) -> bool:
        self._value = not self._value
        self._synced = self.store.save(self.key, _TRUE if self._value else _FALSE)
        logger.info("Dark mode %s", "on" if self._value else "off")
        return self._value


_LIGHT = {
    "background": "linear-gradient(to top right, #c084fc, #f9a8d4, #93c5fd)",
    "card": "rgba(255,255,255,0.30)",
    "card_border": "rgba(255,255,255,0.20)",
    "text": "#000000",
    "input_bg": "#ffffff",
    "input_border": "#d1d5db",
}

_DARK = {
    "background": "#111827",
    "card": "rgba(255,255,255,0.10)",
    "card_border": "rgba(255,255,255,0.10)",
    "text": "#ffffff",
    "input_bg": "#1f2937",
    "input_border": "#4b5563",
}

# (background, text) per priority; completed tasks are greyed out instead.
PRIORITY_COLORS = {
    Priority.HIGH: ("#ef4444", "#ffffff"),
    Priority.MEDIUM: ("#facc15", "#000000"),
    Priority.LOW: ("#22c55e", "#ffffff"),
}
COMPLETED_COLORS = ("#e5e7eb", "#6b7280")


def palette(dark_mode: bool) -> Dict[str, str]:
    return dict(_DARK if dark_mode else _LIGHT)


def task_colors(priority: Priority, completed: bool) -> tuple:
    if completed:
        return COMPLETED_COLORS
    return PRIORITY_COLORS[priority]


def _css(dark_mode: bool) -> str:
    p = palette(dark_mode)
    return f"""
    .stApp {{ background: {p['background']}; color: {p['text']}; }}
    .block-container {{ max-width: 32rem; background: {p['card']};
        border: 1px solid {p['card_border']}; border-radius: 12px;
        backdrop-filter: blur(12px); margin-top: 2.5rem; padding: 1.5rem; }}
    .stApp input, .stApp select, div[data-baseweb="select"] > div {{
        background: {p['input_bg']} !important; color: {p['text']} !important;
        border-color: {p['input_border']} !important; }}
    .tt-task {{ border-radius: 8px; padding: .5rem .75rem; margin-bottom: .25rem; }}
    .tt-task-done {{ opacity: .5; text-decoration: line-through; }}
    .tt-meta {{ font-size: .8rem; margin-top: .2rem; }}
    .tt-badge {{ padding: 1px 8px; border-radius: 999px; font-size: .7rem;
        font-weight: 700; text-transform: uppercase; letter-spacing: .05em;
        background: rgba(255,255,255,.6); color: #111827; }}
    """


def set_theme(
    dark_mode: bool = False,
    page_title: str = "Task Tracker",
    page_icon: str = "✅",
):
    """Configure the Streamlit page and inject the light or dark CSS.

    Safe to call on every rerun: Streamlit only accepts the page config once,
    later calls just re-inject the stylesheet.
    """
    try:
        st.set_page_config(page_title=page_title, page_icon=page_icon, layout="centered")
    except StreamlitAPIException:
        pass
    st.markdown(f"<style>{_css(dark_mode)}</style>", unsafe_allow_html=True)
