"""Helper utilities for value normalization, date parsing, and pt-BR formatting."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

import pandas as pd

EMPTY_PLACEHOLDER = "—"


def normalize_text(value: object) -> str:
    """Normalize a value into a stripped string, or empty string for nulls."""
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    if isinstance(value, pd.Timestamp):
        return value.date().isoformat()
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value).strip()


def to_number(value: object, default: float = 0.0) -> float:
    """Coerce nullable numeric column values to float."""
    if value is None or isinstance(value, bool):
        return default
    try:
        if pd.isna(value):
            return default
    except (TypeError, ValueError):
        pass
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def parse_date(value: object) -> Optional[date]:
    """Parse date-like values into date objects.

    Accepts date/datetime objects, ISO dates, ISO timestamps as returned by the
    database, and dd/mm/yyyy as typed by users.
    """
    if isinstance(value, pd.Timestamp):
        if pd.isna(value):
            return None
        return value.date()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    raw_value = normalize_text(value)
    if not raw_value:
        return None

    for date_format in ("%Y-%m-%d", "%d/%m/%Y"):
        try:
            return datetime.strptime(raw_value, date_format).date()
        except ValueError:
            pass

    try:
        return datetime.fromisoformat(raw_value.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def format_number(value: Optional[float], decimals: int = 2) -> str:
    """Format a number with pt-BR separators (1.234,56)."""
    if value is None:
        return EMPTY_PLACEHOLDER
    return f"{value:,.{decimals}f}".translate(str.maketrans(",.", ".,"))


def format_currency(value: Optional[float]) -> str:
    """Format a BRL amount, e.g. ``R$ 1.234,56``."""
    if value is None:
        return EMPTY_PLACEHOLDER
    formatted = f"R$ {format_number(abs(value), 2)}"
    return f"-{formatted}" if value < 0 else formatted


def format_weight(kg: Optional[float]) -> str:
    """Format kilograms, switching to tonnes from 1000 kg."""
    if kg is None:
        return EMPTY_PLACEHOLDER
    if kg >= 1000:
        return f"{kg / 1000:.2f} t"
    return f"{kg:.0f} kg"


def format_percent(value: Optional[float], decimals: int = 1) -> str:
    if value is None:
        return EMPTY_PLACEHOLDER
    return f"{value:.{decimals}f}%"


def format_date_br(value: object, default: str = "-") -> str:
    """Render a date-like value as dd/mm/yyyy."""
    parsed = parse_date(value)
    if parsed is None:
        return default
    return parsed.strftime("%d/%m/%Y")
