"""Query shapes issued against the hosted Supabase database."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Tuple

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client

from ibrac_dashboard.config import DEFAULT_ORDER_COLUMN, DEFAULT_PAGE_SIZE
from ibrac_dashboard.services.errors import ConfigurationError, DataSourceError
from ibrac_dashboard.utils.logging_config import get_logger
from ibrac_dashboard.utils.pagination import page_slice

logger = get_logger(__name__)

FilterItems = Tuple[Tuple[str, Any], ...]


@dataclass(frozen=True)
class OrderBy:
    field: str = DEFAULT_ORDER_COLUMN
    ascending: bool = False


def normalize_filters(filters: Optional[Mapping[str, Any]]) -> FilterItems:
    """Freeze a filter mapping into sorted (field, value) pairs, dropping nulls."""
    if not filters:
        return tuple()
    items = ((key, value) for key, value in filters.items() if value is not None)
    return tuple(sorted(items, key=lambda item: item[0]))


@dataclass(frozen=True)
class QueryDescriptor:
    """Immutable description of a queryable view over one table.

    Filters are exact-match equality predicates combined with AND.
    """

    resource_name: str
    columns: str = "*"
    filters: FilterItems = field(default_factory=tuple)
    order_by: OrderBy = field(default_factory=OrderBy)
    page_size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def build(
        cls,
        resource_name: str,
        columns: str = "*",
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Optional[OrderBy] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> "QueryDescriptor":
        return cls(
            resource_name=resource_name,
            columns=columns,
            filters=normalize_filters(filters),
            order_by=order_by or OrderBy(),
            page_size=page_size,
        )

    def with_filters(self, filters: Optional[Mapping[str, Any]]) -> "QueryDescriptor":
        return replace(self, filters=normalize_filters(filters))

    def with_page_size(self, page_size: int) -> "QueryDescriptor":
        return replace(self, page_size=page_size)

    def filter_dict(self) -> Dict[str, Any]:
        return dict(self.filters)


def create_supabase_client(url: str, key: str) -> Client:
    """Create a Supabase client, failing early on missing settings."""
    if not url or not key:
        raise ConfigurationError("Missing Supabase configuration (SUPABASE_URL / SUPABASE_KEY).")
    return create_client(url, key)


def _apply_filters(query: Any, filters: FilterItems) -> Any:
    for key, value in filters:
        query = query.eq(key, value)
    return query


def _execute(query: Any, table: str, operation: str) -> Any:
    try:
        return query.execute()
    except APIError as exc:
        logger.error("query_failed", table=table, operation=operation, detail=exc.message)
        raise DataSourceError(table, operation, exc.message or str(exc), exc) from exc
    except httpx.HTTPError as exc:
        logger.error("query_transport_failed", table=table, operation=operation, detail=str(exc))
        raise DataSourceError(table, operation, str(exc), exc) from exc


def fetch_count(client: Client, descriptor: QueryDescriptor) -> int:
    """Issue a count-only query honoring the descriptor filters."""
    query = client.table(descriptor.resource_name).select("*", count="exact", head=True)
    query = _apply_filters(query, descriptor.filters)
    response = _execute(query, descriptor.resource_name, "count")
    count = response.count or 0
    logger.debug("count_fetched", table=descriptor.resource_name, filters=descriptor.filters, count=count)
    return count


def fetch_page(client: Client, descriptor: QueryDescriptor, page: int, page_size: int) -> List[Dict[str, Any]]:
    """Fetch the filtered, ordered row window for ``page``.

    The window is the half-open range [(page-1)*page_size, page*page_size);
    PostgREST ranges are inclusive, hence ``end - 1``.
    """
    start, end = page_slice(page, page_size)
    query = client.table(descriptor.resource_name).select(descriptor.columns)
    query = _apply_filters(query, descriptor.filters)
    query = query.order(descriptor.order_by.field, desc=not descriptor.order_by.ascending).range(start, end - 1)
    response = _execute(query, descriptor.resource_name, "select")
    rows = response.data or []
    logger.debug(
        "page_fetched",
        table=descriptor.resource_name,
        offset=start,
        limit=page_size,
        rows=len(rows),
    )
    return rows


def fetch_all(
    client: Client,
    table: str,
    columns: str = "*",
    filters: Optional[Mapping[str, Any]] = None,
    order_by: Optional[OrderBy] = None,
) -> List[Dict[str, Any]]:
    """Fetch every matching row; used by summaries and exports."""
    order = order_by or OrderBy()
    query = client.table(table).select(columns)
    query = _apply_filters(query, normalize_filters(filters))
    query = query.order(order.field, desc=not order.ascending)
    response = _execute(query, table, "select")
    return response.data or []


def search_rows(client: Client, table: str, column: str, term: str, limit: int) -> List[Dict[str, Any]]:
    """Case-insensitive substring search on one column."""
    if not term:
        return []
    query = client.table(table).select("*").ilike(column, f"%{term}%").order(column).limit(limit)
    response = _execute(query, table, "search")
    return response.data or []


def insert_row(client: Client, table: str, payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Insert a single row and return it as stored."""
    response = _execute(client.table(table).insert(dict(payload)), table, "insert")
    rows = response.data or []
    logger.info("row_inserted", table=table, record_id=rows[0].get("id") if rows else None)
    return rows[0] if rows else dict(payload)
