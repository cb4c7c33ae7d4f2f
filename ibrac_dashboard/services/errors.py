"""Exception hierarchy for the dashboard services."""

from __future__ import annotations

from typing import Optional


class DashboardError(Exception):
    """Base class for errors raised by dashboard services."""


class ConfigurationError(DashboardError):
    """Raised when required settings (e.g. Supabase credentials) are missing."""


class DataSourceError(DashboardError):
    """Raised when a query against the hosted database fails.

    Wraps both backend rejections (PostgREST errors) and transport failures so
    callers only handle one type.
    """

    def __init__(self, table: str, operation: str, detail: str, cause: Optional[BaseException] = None) -> None:
        self.table = table
        self.operation = operation
        self.detail = detail
        self.cause = cause
        super().__init__(f"{operation} on '{table}' failed: {detail}")


class AuthenticationError(DashboardError):
    """Raised when sign-in is rejected."""
