from datetime import date, datetime

import pandas as pd
import pytest

from ibrac_dashboard.services.filter_service import ALL_OPTION, build_equality_filters
from ibrac_dashboard.services.schemas import AuditLog, Entrada, Sublote
from ibrac_dashboard.utils import helpers


class TestNormalization:
    @pytest.mark.parametrize("value, expected", [(None, ""), (float("nan"), ""), ("  a ", "a"), (12, "12")])
    def test_normalize_text(self, value, expected):
        assert helpers.normalize_text(value) == expected

    def test_normalize_timestamp(self):
        assert helpers.normalize_text(pd.Timestamp("2026-01-15 10:30")) == "2026-01-15"

    @pytest.mark.parametrize("value, expected", [("3.5", 3.5), (None, 0.0), (True, 0.0), ("abc", 0.0), (float("nan"), 0.0)])
    def test_to_number(self, value, expected):
        assert helpers.to_number(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("2026-01-15", date(2026, 1, 15)),
            ("15/01/2026", date(2026, 1, 15)),
            ("2026-01-15T10:30:00Z", date(2026, 1, 15)),
            (datetime(2026, 1, 15, 8), date(2026, 1, 15)),
            ("", None),
            ("ontem", None),
        ],
    )
    def test_parse_date(self, value, expected):
        assert helpers.parse_date(value) == expected


class TestFormatting:
    def test_number_uses_brazilian_separators(self):
        assert helpers.format_number(1234.5) == "1.234,50"
        assert helpers.format_number(-1234567.891, 1) == "-1.234.567,9"

    def test_currency(self):
        assert helpers.format_currency(1234.56) == "R$ 1.234,56"
        assert helpers.format_currency(-10) == "-R$ 10,00"
        assert helpers.format_currency(None) == helpers.EMPTY_PLACEHOLDER

    def test_weight_switches_to_tonnes(self):
        assert helpers.format_weight(950) == "950 kg"
        assert helpers.format_weight(1500) == "1.50 t"

    def test_percent_and_date(self):
        assert helpers.format_percent(12.345) == "12.3%"
        assert helpers.format_date_br("2026-03-05T12:00:00+00:00") == "05/03/2026"
        assert helpers.format_date_br(None) == "-"


class TestEqualityFilters:
    def test_all_and_blank_choices_are_dropped(self):
        selected = {"status": "disponivel", "dono_id": ALL_OPTION, "tipo": "  ", "local": None}
        assert build_equality_filters(selected) == {"status": "disponivel"}


class TestSchemas:
    def test_entrada_from_row(self):
        entrada = Entrada.from_row(
            {
                "id": "e1",
                "codigo": "E-1",
                "data_entrada": "2026-01-15",
                "tipo_material": "Cobre",
                "peso_bruto_kg": "1000",
                "peso_liquido_kg": 950,
                "valor_unitario": None,
                "nota_fiscal": "",
            }
        )
        assert entrada.peso_bruto_kg == 1000.0
        assert entrada.valor_unitario is None
        assert entrada.nota_fiscal is None

    def test_sublote_defaults(self):
        sublote = Sublote.from_row({"id": "s1", "codigo": "S-1"})
        assert sublote.peso_kg == 0.0
        assert sublote.status is None

    def test_audit_log_keeps_only_mapping_payload(self):
        row = {"id": "a1", "table_name": "entradas", "action": "INSERT", "created_at": "2026-01-15T10:00:00Z"}
        assert AuditLog.from_row({**row, "record_data": {"codigo": "E-1"}}).record_data == {"codigo": "E-1"}
        assert AuditLog.from_row({**row, "record_data": "texto"}).record_data is None
