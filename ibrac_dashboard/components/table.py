"""Read-only listing table for paginated rows."""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from typing import Any, Dict, List, Sequence

import pandas as pd
import streamlit as st

from ibrac_dashboard.config import COLUMN_LABELS
from ibrac_dashboard.utils.helpers import format_date_br

DATE_COLUMNS = {"data_entrada", "data_inicio", "data_acerto", "created_at"}


def rows_to_dataframe(rows: Sequence[Any], columns: List[str]) -> pd.DataFrame:
    """Project typed or mapping rows onto ``columns`` with display labels."""
    records: List[Dict[str, Any]] = [asdict(row) if is_dataclass(row) else dict(row) for row in rows]
    dataframe = pd.DataFrame(records, columns=columns)
    for column in DATE_COLUMNS.intersection(dataframe.columns):
        dataframe[column] = dataframe[column].apply(format_date_br)
    return dataframe.rename(columns=COLUMN_LABELS)


def render_table(rows: Sequence[Any], columns: List[str], key: str) -> None:
    """Render the current page of rows."""
    if not rows:
        st.info("Nenhum registro encontrado.")
        return

    st.dataframe(
        rows_to_dataframe(rows, columns),
        key=key,
        hide_index=True,
        width="stretch",
    )
