"""Audit log browser."""

from __future__ import annotations

import streamlit as st

from ibrac_dashboard.components.filters import render_filters
from ibrac_dashboard.config import AUDIT_COLUMNS, AUDIT_LOGS_TABLE, AUDIT_TABLE_OPTIONS, COLUMN_LABELS
from ibrac_dashboard.services.data_source import QueryDescriptor
from ibrac_dashboard.services.filter_service import build_equality_filters
from ibrac_dashboard.services.schemas import AuditLog
from ibrac_dashboard.views.common import ViewContext, get_paginated_query, render_listing

VIEW_KEY = "auditoria"


def render(context: ViewContext) -> None:
    st.markdown("### Auditoria")

    selected = render_filters(
        {"table_name": AUDIT_TABLE_OPTIONS, "action": ["INSERT", "UPDATE", "DELETE"]},
        COLUMN_LABELS,
        key=VIEW_KEY,
    )
    filters = build_equality_filters(selected)
    query = get_paginated_query(
        VIEW_KEY,
        context.client,
        QueryDescriptor.build(AUDIT_LOGS_TABLE, filters=filters),
        AuditLog.from_row,
    )
    query.set_filters(filters)
    render_listing(query, AUDIT_COLUMNS, key=VIEW_KEY)

    if query.data:
        codes = {f"{log.created_at} {log.table_name} {log.action}": log for log in query.data}
        chosen = st.selectbox("Detalhes do registro", list(codes.keys()), key=f"{VIEW_KEY}_detail")
        st.json(codes[chosen].record_data or {})
