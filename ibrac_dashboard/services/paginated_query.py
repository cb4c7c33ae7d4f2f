"""Paginated query provider over a Supabase table.

A ``PaginatedQuery`` owns the page / page-size state of one view, issues the
count and the windowed row query for its ``QueryDescriptor`` and exposes the
navigation operations used by the pagination controls.

Count and page queries are separate round-trips and are not guaranteed to
observe the same snapshot; under concurrent writes the last page can briefly
come back shorter than ``total_count`` suggests.

Every parameter change bumps a request generation. A fetch result is applied
only when the generation it was issued under is still current, so a response
for superseded parameters never overwrites newer state.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Generic, List, Mapping, Optional, Tuple, TypeVar, cast

from supabase import Client

from ibrac_dashboard.config import DEFAULT_PAGE_SIZE
from ibrac_dashboard.services.data_source import QueryDescriptor, fetch_count, fetch_page
from ibrac_dashboard.services.errors import DataSourceError
from ibrac_dashboard.utils.logging_config import get_logger
from ibrac_dashboard.utils.pagination import compute_total_pages, is_valid_page, item_range, page_slice

logger = get_logger(__name__)

T = TypeVar("T")
RowFactory = Callable[[Mapping[str, Any]], T]
QueryKey = Tuple[QueryDescriptor, int, int]

NO_RECORDS_MESSAGE = "Nenhum registro encontrado"


@dataclass(frozen=True)
class PaginationState:
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    total_count: int = 0

    @property
    def total_pages(self) -> int:
        return compute_total_pages(self.total_count, self.page_size)

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def offset(self) -> int:
        return page_slice(self.page, self.page_size)[0]

    @property
    def first_item(self) -> int:
        return item_range(self.page, self.page_size, self.total_count)[0]

    @property
    def last_item(self) -> int:
        return item_range(self.page, self.page_size, self.total_count)[1]

    @property
    def summary(self) -> str:
        """Human-readable "showing X to Y of Z" line."""
        if self.total_count == 0:
            return NO_RECORDS_MESSAGE
        return f"Mostrando {self.first_item} a {self.last_item} de {self.total_count} registros"


def initialize(descriptor: QueryDescriptor, initial_page_size: Optional[int] = None) -> PaginationState:
    """Return the state of a freshly mounted view: page 1, nothing counted yet."""
    page_size = descriptor.page_size if initial_page_size is None else initial_page_size
    if page_size <= 0:
        raise ValueError("page_size must be positive.")
    return PaginationState(page=1, page_size=page_size, total_count=0)


class PaginatedQuery(Generic[T]):
    """Page-windowed view over one table, bound to a concrete row type."""

    def __init__(
        self,
        client: Client,
        descriptor: QueryDescriptor,
        row_factory: Optional[RowFactory[T]] = None,
        initial_page_size: Optional[int] = None,
    ) -> None:
        self._client = client
        self._state = initialize(descriptor, initial_page_size)
        self._descriptor = descriptor.with_page_size(self._state.page_size)
        self._row_factory: RowFactory[T] = row_factory or cast(RowFactory[T], dict)
        self._data: List[T] = []
        self._error: Optional[DataSourceError] = None
        self._is_fetching = False
        self._has_loaded = False
        self._generation = 0
        self._inflight_token: Optional[int] = None
        self._fetched_key: Optional[QueryKey] = None

    @property
    def descriptor(self) -> QueryDescriptor:
        return self._descriptor

    @property
    def pagination(self) -> PaginationState:
        return self._state

    @property
    def data(self) -> List[T]:
        return list(self._data)

    @property
    def error(self) -> Optional[DataSourceError]:
        return self._error

    @property
    def is_fetching(self) -> bool:
        return self._is_fetching

    @property
    def is_loading(self) -> bool:
        """True while the first fetch for the current query is in flight."""
        return self._is_fetching and not self._has_loaded

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def query_key(self) -> QueryKey:
        return self._descriptor, self._state.page, self._state.page_size

    def _set_state(self, state: PaginationState) -> None:
        self._state = state
        self._generation += 1

    def go_to_page(self, page: object) -> None:
        """Move to ``page``; out-of-range or non-integral requests are ignored."""
        if not is_valid_page(page, self._state.total_pages):
            return
        target = int(cast(float, page))
        if target != self._state.page:
            self._set_state(replace(self._state, page=target))

    def next_page(self) -> None:
        if self._state.has_next:
            self._set_state(replace(self._state, page=self._state.page + 1))

    def prev_page(self) -> None:
        if self._state.has_previous:
            self._set_state(replace(self._state, page=self._state.page - 1))

    def first_page(self) -> None:
        self.go_to_page(1)

    def last_page(self) -> None:
        self.go_to_page(self._state.total_pages)

    def set_page_size(self, size: int) -> None:
        """Change page size; always returns to page 1."""
        if size <= 0:
            raise ValueError("page_size must be positive.")
        self._descriptor = self._descriptor.with_page_size(size)
        self._set_state(replace(self._state, page=1, page_size=size))

    def set_filters(self, filters: Optional[Mapping[str, Any]]) -> None:
        """Replace the equality filters; a new query identity starts at page 1."""
        descriptor = self._descriptor.with_filters(filters)
        if descriptor == self._descriptor:
            return
        self._descriptor = descriptor
        self._has_loaded = False
        self._set_state(replace(self._state, page=1, total_count=0))

    def begin_fetch(self) -> int:
        """Mark a fetch as in flight and return its generation token."""
        self._is_fetching = True
        self._inflight_token = self._generation
        return self._generation

    def complete_fetch(
        self,
        token: int,
        total_count: Optional[int],
        rows: Optional[List[Mapping[str, Any]]],
        error: Optional[DataSourceError] = None,
    ) -> bool:
        """Apply a fetch result if ``token`` is still current.

        ``None`` for ``total_count`` keeps the previous count. ``None`` for
        ``rows`` keeps the previous rows only when they were fetched for the
        same query key; rows of another page or filter are dropped.
        """
        if token != self._generation:
            logger.info(
                "stale_result_discarded",
                table=self._descriptor.resource_name,
                token=token,
                generation=self._generation,
            )
            if self._inflight_token == token:
                self._is_fetching = False
                self._inflight_token = None
            return False

        self._is_fetching = False
        self._inflight_token = None
        self._error = error
        if total_count is not None:
            self._state = replace(self._state, total_count=total_count)
        if rows is not None:
            self._data = [self._row_factory(row) for row in rows]
            self._has_loaded = True
        elif self._fetched_key != self.query_key:
            self._data = []
        self._fetched_key = self.query_key
        return True

    def refetch(self) -> None:
        """Re-issue the count and page queries with the current parameters."""
        token = self.begin_fetch()
        descriptor, page, page_size = self.query_key
        total_count: Optional[int] = None
        rows: Optional[List[Mapping[str, Any]]] = None
        error: Optional[DataSourceError] = None

        try:
            total_count = fetch_count(self._client, descriptor)
        except DataSourceError as exc:
            error = exc

        try:
            rows = fetch_page(self._client, descriptor, page, page_size)
        except DataSourceError as exc:
            error = error or exc

        if error is not None:
            logger.warning("paginated_fetch_failed", table=descriptor.resource_name, error=str(error))
        self.complete_fetch(token, total_count, rows, error)

    def ensure_fresh(self) -> bool:
        """Fetch when the query identity changed since the last fetch."""
        if self._fetched_key == self.query_key:
            return False
        self.refetch()
        return True
