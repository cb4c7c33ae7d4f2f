"""Top navigation bar component."""

from __future__ import annotations

from datetime import datetime
from html import escape
from typing import Optional

import streamlit as st

from ibrac_dashboard.config import APP_TITLE


def render_navbar(user_email: str, role: Optional[str]) -> None:
    """Render dashboard header with user, role and timestamp."""
    timestamp = datetime.now().strftime("%d/%m/%Y %H:%M")
    st.markdown(
        f"""
        <div class="navbar">
            <div class="navbar-title">{escape(APP_TITLE)}</div>
            <div class="navbar-meta">{escape(user_email)} ({escape(role or "sem perfil")}) | {timestamp}</div>
        </div>
        """,
        unsafe_allow_html=True,
    )
