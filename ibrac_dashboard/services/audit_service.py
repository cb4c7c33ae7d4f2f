"""Audit trail persistence for dashboard writes."""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional

from supabase import Client

from ibrac_dashboard.config import AUDIT_LOGS_TABLE
from ibrac_dashboard.services.data_source import insert_row


def _json_safe(values: Mapping[str, Any]) -> Dict[str, Any]:
    """Round-trip through JSON so dates and decimals are stored as plain values."""
    return json.loads(json.dumps(dict(values), ensure_ascii=True, default=str))


def build_audit_entry(
    table_name: str,
    action: str,
    record_id: Optional[str],
    user_id: Optional[str],
    record_data: Mapping[str, Any],
) -> Dict[str, Any]:
    """Build one audit row; ``created_at`` is left to the database default."""
    return {
        "table_name": table_name,
        "action": action,
        "record_id": record_id,
        "user_id": user_id,
        "record_data": _json_safe(record_data),
    }


def append_audit_entry(
    client: Client,
    table_name: str,
    action: str,
    record_id: Optional[str],
    user_id: Optional[str],
    record_data: Mapping[str, Any],
) -> Dict[str, Any]:
    """Append one audit event with the written payload."""
    return insert_row(client, AUDIT_LOGS_TABLE, build_audit_entry(table_name, action, record_id, user_id, record_data))
