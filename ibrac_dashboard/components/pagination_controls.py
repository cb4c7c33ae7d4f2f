"""Pagination controls bound to a PaginatedQuery."""

from __future__ import annotations

from typing import List, Optional

import streamlit as st

from ibrac_dashboard.config import PAGE_SIZE_OPTIONS
from ibrac_dashboard.services.paginated_query import PaginatedQuery


def render_pagination_controls(
    query: PaginatedQuery,
    key: str,
    show_page_size: bool = True,
    page_size_options: Optional[List[int]] = None,
) -> None:
    """Render the "showing X to Y of Z" line, page-size selector and nav buttons.

    Buttons act through ``on_click`` callbacks so the provider state is already
    updated when Streamlit reruns the script.
    """
    options = page_size_options or PAGE_SIZE_OPTIONS
    state = query.pagination

    info_col, size_col, nav_col = st.columns([3, 1, 3])
    with info_col:
        st.caption(state.summary)

    if show_page_size:
        with size_col:
            current = state.page_size if state.page_size in options else options[0]
            st.selectbox(
                "Por página",
                options=options,
                index=options.index(current),
                key=f"{key}_page_size",
                on_change=lambda: query.set_page_size(int(st.session_state[f"{key}_page_size"])),
            )

    with nav_col:
        first_col, prev_col, label_col, next_col, last_col = st.columns([1, 1, 2, 1, 1])
        first_col.button(
            "«",
            key=f"{key}_first",
            help="Primeira página",
            disabled=not state.has_previous,
            on_click=query.first_page,
        )
        prev_col.button(
            "‹",
            key=f"{key}_prev",
            help="Página anterior",
            disabled=not state.has_previous,
            on_click=query.prev_page,
        )
        label_col.markdown(f"Página **{state.page}** de **{state.total_pages or 1}**")
        next_col.button(
            "›",
            key=f"{key}_next",
            help="Próxima página",
            disabled=not state.has_next,
            on_click=query.next_page,
        )
        last_col.button(
            "»",
            key=f"{key}_last",
            help="Última página",
            disabled=not state.has_next,
            on_click=query.last_page,
        )
