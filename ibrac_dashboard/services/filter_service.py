"""Filtering utilities for the paginated listings."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

ALL_OPTION = "Todos"


def build_equality_filters(selected_filters: Mapping[str, Optional[str]]) -> Dict[str, Any]:
    """Turn single-choice selections into equality filters.

    Empty selections and the "all" choice impose no predicate.
    """
    return {
        column: value
        for column, value in selected_filters.items()
        if value is not None and str(value).strip() and value != ALL_OPTION
    }
