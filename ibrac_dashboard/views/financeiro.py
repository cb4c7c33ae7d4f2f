"""Financial settlements listing."""

from __future__ import annotations

import streamlit as st

from ibrac_dashboard.components.filters import render_filters
from ibrac_dashboard.config import (
    ACERTO_COLUMNS,
    ACERTO_STATUS_OPTIONS,
    ACERTO_TIPO_OPTIONS,
    ACERTOS_TABLE,
    COLUMN_LABELS,
    SAIDA_EXPORT_SELECT,
    SAIDAS_TABLE,
)
from ibrac_dashboard.services import data_source, export_service
from ibrac_dashboard.services.data_source import OrderBy, QueryDescriptor
from ibrac_dashboard.services.filter_service import build_equality_filters
from ibrac_dashboard.utils.helpers import format_currency, to_number
from ibrac_dashboard.views.common import ViewContext, get_paginated_query, render_export_buttons, render_listing

VIEW_KEY = "financeiro"


def render(context: ViewContext) -> None:
    st.markdown("### Financeiro")

    selected = render_filters(
        {"status": ACERTO_STATUS_OPTIONS, "tipo": ACERTO_TIPO_OPTIONS},
        COLUMN_LABELS,
        key=VIEW_KEY,
    )
    filters = build_equality_filters(selected)
    query = get_paginated_query(
        VIEW_KEY,
        context.client,
        QueryDescriptor.build(ACERTOS_TABLE, filters=filters, order_by=OrderBy("data_acerto", ascending=False)),
    )
    query.set_filters(filters)
    render_listing(query, ACERTO_COLUMNS, key=VIEW_KEY)

    receitas = sum(to_number(row.get("valor")) for row in query.data if row.get("tipo") == "receita")
    despesas = sum(to_number(row.get("valor")) for row in query.data if row.get("tipo") == "despesa")
    columns = st.columns(3)
    columns[0].metric("Receitas (página)", format_currency(receitas))
    columns[1].metric("Despesas (página)", format_currency(despesas))
    columns[2].metric("Saldo (página)", format_currency(receitas - despesas))

    st.markdown("#### Saídas")
    render_export_buttons(
        title="Relatório de Saídas",
        filename="saidas",
        load_rows=lambda: data_source.fetch_all(context.client, SAIDAS_TABLE, SAIDA_EXPORT_SELECT),
        formatter=export_service.format_saida_report,
        key=f"{VIEW_KEY}_saidas",
    )
