"""Filter panel component."""

from __future__ import annotations

from typing import Dict, List, Optional

import streamlit as st

from ibrac_dashboard.services.filter_service import ALL_OPTION


def render_filters(options: Dict[str, List[str]], labels: Dict[str, str], key: str) -> Dict[str, Optional[str]]:
    """Render one single-choice filter per column and return the selections."""
    selected_filters: Dict[str, Optional[str]] = {}
    slots = st.columns(max(len(options), 1))

    for index, (column, values) in enumerate(options.items()):
        with slots[index]:
            selected_filters[column] = st.selectbox(
                labels.get(column, column),
                options=[ALL_OPTION, *values],
                key=f"{key}_filter_{column}",
            )

    return selected_filters
