"""Stock (sublots) listing."""

from __future__ import annotations

import streamlit as st

from ibrac_dashboard.components.filters import render_filters
from ibrac_dashboard.config import (
    COLUMN_LABELS,
    SUBLOTE_COLUMNS,
    SUBLOTE_EXPORT_SELECT,
    SUBLOTE_STATUS_OPTIONS,
    SUBLOTES_TABLE,
)
from ibrac_dashboard.services import data_source, export_service, kpi_service
from ibrac_dashboard.services.data_source import QueryDescriptor
from ibrac_dashboard.services.filter_service import build_equality_filters
from ibrac_dashboard.services.schemas import Sublote
from ibrac_dashboard.utils.helpers import format_currency
from ibrac_dashboard.views.common import ViewContext, get_paginated_query, render_export_buttons, render_listing

VIEW_KEY = "estoque"


def render(context: ViewContext) -> None:
    st.markdown("### Estoque")

    selected = render_filters({"status": SUBLOTE_STATUS_OPTIONS}, COLUMN_LABELS, key=VIEW_KEY)
    filters = build_equality_filters(selected)

    query = get_paginated_query(
        VIEW_KEY,
        context.client,
        QueryDescriptor.build(SUBLOTES_TABLE, filters=filters),
        Sublote.from_row,
    )
    query.set_filters(filters)
    render_listing(query, SUBLOTE_COLUMNS, key=VIEW_KEY)

    page_rows = [{"peso_kg": row.peso_kg, "custo_unitario_total": row.custo_unitario_total} for row in query.data]
    st.caption(f"Custo médio ponderado da página: {format_currency(kpi_service.custo_medio_ponderado(page_rows))}/kg")

    st.markdown("---")
    report_kind = st.radio("Relatório", ["Estoque", "Rastreabilidade"], horizontal=True, key=f"{VIEW_KEY}_report")
    formatter = (
        export_service.format_estoque_report if report_kind == "Estoque" else export_service.format_rastreabilidade_report
    )
    render_export_buttons(
        title=f"Relatório de {report_kind}",
        filename=report_kind.lower(),
        load_rows=lambda: data_source.fetch_all(context.client, SUBLOTES_TABLE, SUBLOTE_EXPORT_SELECT, filters),
        formatter=formatter,
        key=VIEW_KEY,
    )
