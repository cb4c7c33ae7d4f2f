"""Intake registration and listing."""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

import streamlit as st

from ibrac_dashboard.components.filters import render_filters
from ibrac_dashboard.components.forms import render_entrada_form
from ibrac_dashboard.config import (
    COLUMN_LABELS,
    ENTRADA_COLUMNS,
    ENTRADA_EXPORT_SELECT,
    ENTRADA_STATUS_OPTIONS,
    ENTRADAS_TABLE,
    PARCEIROS_TABLE,
    PARTNER_SEARCH_LIMIT,
)
from ibrac_dashboard.services import data_source, export_service, validation_service
from ibrac_dashboard.services.data_source import QueryDescriptor
from ibrac_dashboard.services.errors import DataSourceError
from ibrac_dashboard.services.filter_service import build_equality_filters
from ibrac_dashboard.services.schemas import Entrada
from ibrac_dashboard.views.common import (
    ViewContext,
    get_paginated_query,
    register_row,
    render_export_buttons,
    render_listing,
)

VIEW_KEY = "entrada"


def _partner_search(context: ViewContext):
    def search(term: str) -> List[Tuple[str, Dict[str, Any]]]:
        if not term or len(term.strip()) < 2:
            return []
        try:
            rows = data_source.search_rows(
                context.client, PARCEIROS_TABLE, "razao_social", term.strip(), PARTNER_SEARCH_LIMIT
            )
        except DataSourceError:
            return []
        return [(f'{row.get("razao_social")} ({row.get("cnpj") or "sem CNPJ"})', row) for row in rows]

    return search


def render(context: ViewContext) -> None:
    st.markdown("### Entradas")

    selected = render_filters({"status": ENTRADA_STATUS_OPTIONS}, COLUMN_LABELS, key=VIEW_KEY)
    filters = build_equality_filters(selected)
    query = get_paginated_query(
        VIEW_KEY,
        context.client,
        QueryDescriptor.build(ENTRADAS_TABLE, filters=filters),
        Entrada.from_row,
    )
    query.set_filters(filters)

    with st.expander("Nova entrada"):
        submitted, payload = render_entrada_form(_partner_search(context))
        if submitted:
            valid, error_message, normalized = validation_service.validate_entrada_payload(payload)
            if not valid:
                st.error(error_message)
            elif register_row(context, ENTRADAS_TABLE, normalized, listing=query) is not None:
                st.success(f"Entrada {normalized['codigo']} registrada.")

    render_listing(query, ENTRADA_COLUMNS, key=VIEW_KEY)

    st.markdown("---")
    render_export_buttons(
        title="Relatório de Entradas",
        filename="entradas",
        load_rows=lambda: data_source.fetch_all(context.client, ENTRADAS_TABLE, ENTRADA_EXPORT_SELECT, filters),
        formatter=export_service.format_entrada_report,
        key=VIEW_KEY,
    )
