"""Processing runs: registration, loss-profit preview and listing."""

from __future__ import annotations

import streamlit as st

from ibrac_dashboard.components.filters import render_filters
from ibrac_dashboard.components.forms import render_beneficiamento_form
from ibrac_dashboard.config import (
    BENEFICIAMENTO_COLUMNS,
    BENEFICIAMENTO_EXPORT_SELECT,
    BENEFICIAMENTO_STATUS_OPTIONS,
    BENEFICIAMENTOS_TABLE,
    COLUMN_LABELS,
    TIPO_BENEFICIAMENTO_OPTIONS,
)
from ibrac_dashboard.services import data_source, export_service, validation_service
from ibrac_dashboard.services.data_source import QueryDescriptor
from ibrac_dashboard.services.filter_service import build_equality_filters
from ibrac_dashboard.services.schemas import Beneficiamento
from ibrac_dashboard.views.common import (
    ViewContext,
    get_paginated_query,
    register_row,
    render_export_buttons,
    render_listing,
)

VIEW_KEY = "beneficiamento"


def render(context: ViewContext) -> None:
    st.markdown("### Beneficiamento")

    selected = render_filters(
        {"status": BENEFICIAMENTO_STATUS_OPTIONS, "tipo_beneficiamento": TIPO_BENEFICIAMENTO_OPTIONS},
        COLUMN_LABELS,
        key=VIEW_KEY,
    )
    filters = build_equality_filters(selected)
    query = get_paginated_query(
        VIEW_KEY,
        context.client,
        QueryDescriptor.build(BENEFICIAMENTOS_TABLE, filters=filters),
        Beneficiamento.from_row,
    )
    query.set_filters(filters)

    with st.expander("Novo beneficiamento"):
        submitted, payload = render_beneficiamento_form()
        if submitted:
            valid, error_message, normalized = validation_service.validate_beneficiamento_payload(payload)
            if not valid:
                st.error(error_message)
            elif register_row(context, BENEFICIAMENTOS_TABLE, normalized, listing=query) is not None:
                st.success(f"Beneficiamento {normalized['codigo']} registrado.")

    render_listing(query, BENEFICIAMENTO_COLUMNS, key=VIEW_KEY)

    st.markdown("---")
    render_export_buttons(
        title="Relatório de Beneficiamentos",
        filename="beneficiamentos",
        load_rows=lambda: data_source.fetch_all(
            context.client, BENEFICIAMENTOS_TABLE, BENEFICIAMENTO_EXPORT_SELECT, filters
        ),
        formatter=export_service.format_beneficiamento_report,
        key=VIEW_KEY,
    )
