"""Shared plumbing for the page views."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence

import streamlit as st
from supabase import Client

from ibrac_dashboard.components.pagination_controls import render_pagination_controls
from ibrac_dashboard.components.table import render_table
from ibrac_dashboard.services import audit_service, data_source, export_service
from ibrac_dashboard.services.auth_service import SessionUser
from ibrac_dashboard.services.data_source import QueryDescriptor
from ibrac_dashboard.services.errors import DataSourceError
from ibrac_dashboard.services.paginated_query import PaginatedQuery, RowFactory

QUERY_STATE_SUFFIX = "_query"


@dataclass(frozen=True)
class ViewContext:
    client: Client
    user: SessionUser


def get_paginated_query(
    view_key: str,
    client: Client,
    descriptor: QueryDescriptor,
    row_factory: Optional[RowFactory[Any]] = None,
) -> PaginatedQuery:
    """Return the view's provider, creating it on first mount."""
    state_key = f"{view_key}{QUERY_STATE_SUFFIX}"
    query = st.session_state.get(state_key)
    if not isinstance(query, PaginatedQuery) or query.descriptor.resource_name != descriptor.resource_name:
        query = PaginatedQuery(client, descriptor, row_factory)
        st.session_state[state_key] = query
    return query


def discard_inactive_queries(active_view: str) -> None:
    """Drop providers of views that are no longer displayed."""
    active_key = f"{active_view}{QUERY_STATE_SUFFIX}"
    stale_keys = [
        key for key in st.session_state.keys() if str(key).endswith(QUERY_STATE_SUFFIX) and key != active_key
    ]
    for key in stale_keys:
        del st.session_state[key]


def render_listing(query: PaginatedQuery, columns: List[str], key: str) -> None:
    """Fetch if needed, then render table, errors and pagination controls."""
    with st.spinner("Carregando..."):
        query.ensure_fresh()

    if query.error is not None:
        st.error(f"Erro ao carregar dados: {query.error.detail}")

    render_table(query.data, columns, key=f"{key}_table")
    render_pagination_controls(query, key=key)
    st.button("Atualizar", key=f"{key}_refetch", on_click=query.refetch)


def render_export_buttons(
    title: str,
    filename: str,
    load_rows: Callable[[], Sequence[Mapping[str, Any]]],
    formatter: Callable[[Sequence[Mapping[str, Any]]], List[dict]],
    key: str,
) -> None:
    """Offer spreadsheet and print downloads of the full filtered result."""
    if not st.toggle("Preparar exportação", key=f"{key}_export_toggle"):
        return
    try:
        rows = formatter(load_rows())
    except DataSourceError as exc:
        st.error(f"Erro ao exportar: {exc.detail}")
        return
    if not rows:
        st.info("Nada para exportar.")
        return

    file_name, content = export_service.export_to_excel(rows, filename)
    excel_col, print_col = st.columns(2)
    excel_col.download_button(
        "Exportar Excel",
        data=content,
        file_name=file_name,
        mime=export_service.XLSX_MIME,
        key=f"{key}_xlsx",
    )
    print_col.download_button(
        "Versão para impressão",
        data=export_service.build_print_html(title, rows, list(rows[0].keys())),
        file_name=f"{filename}.html",
        mime="text/html",
        key=f"{key}_print",
    )


def register_row(
    context: ViewContext,
    table: str,
    payload: Mapping[str, Any],
    listing: Optional[PaginatedQuery] = None,
) -> Optional[dict]:
    """Insert one row, record it in the audit trail and refresh the listing."""
    try:
        row = data_source.insert_row(context.client, table, payload)
        audit_service.append_audit_entry(
            context.client,
            table,
            "INSERT",
            row.get("id"),
            context.user.id,
            payload,
        )
    except DataSourceError as exc:
        st.error(f"Erro ao salvar: {exc.detail}")
        return None

    if listing is not None:
        listing.refetch()
    return row


def options_from_rows(rows: Iterable[Mapping[str, Any]], label_field: str) -> dict:
    """Map display labels to ids for select boxes."""
    return {str(row.get(label_field)): row.get("id") for row in rows}
