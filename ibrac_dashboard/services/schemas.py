"""Typed row schemas for the tables listed by the dashboard views."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ibrac_dashboard.utils.helpers import normalize_text, to_number


def _optional_number(value: object) -> Optional[float]:
    if value is None or normalize_text(value) == "":
        return None
    return to_number(value)


def _optional_text(value: object) -> Optional[str]:
    text = normalize_text(value)
    return text or None


@dataclass(frozen=True)
class Entrada:
    id: str
    codigo: str
    data_entrada: str
    tipo_material: str
    peso_bruto_kg: float
    peso_liquido_kg: float
    nota_fiscal: Optional[str] = None
    valor_unitario: Optional[float] = None
    valor_total: Optional[float] = None
    status: Optional[str] = None
    dono_id: Optional[str] = None
    parceiro_id: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Entrada":
        return cls(
            id=normalize_text(row.get("id")),
            codigo=normalize_text(row.get("codigo")),
            data_entrada=normalize_text(row.get("data_entrada")),
            tipo_material=normalize_text(row.get("tipo_material")),
            peso_bruto_kg=to_number(row.get("peso_bruto_kg")),
            peso_liquido_kg=to_number(row.get("peso_liquido_kg")),
            nota_fiscal=_optional_text(row.get("nota_fiscal")),
            valor_unitario=_optional_number(row.get("valor_unitario")),
            valor_total=_optional_number(row.get("valor_total")),
            status=_optional_text(row.get("status")),
            dono_id=_optional_text(row.get("dono_id")),
            parceiro_id=_optional_text(row.get("parceiro_id")),
            created_at=_optional_text(row.get("created_at")),
        )


@dataclass(frozen=True)
class Beneficiamento:
    id: str
    codigo: str
    data_inicio: Optional[str] = None
    tipo_beneficiamento: Optional[str] = None
    peso_entrada_kg: Optional[float] = None
    peso_saida_kg: Optional[float] = None
    perda_real_pct: Optional[float] = None
    perda_cobrada_pct: Optional[float] = None
    custo_mo_terceiro: Optional[float] = None
    custo_mo_ibrac: Optional[float] = None
    custo_frete_ida: Optional[float] = None
    custo_frete_volta: Optional[float] = None
    lme_referencia_kg: Optional[float] = None
    lucro_perda_valor: Optional[float] = None
    status: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Beneficiamento":
        return cls(
            id=normalize_text(row.get("id")),
            codigo=normalize_text(row.get("codigo")),
            data_inicio=_optional_text(row.get("data_inicio")),
            tipo_beneficiamento=_optional_text(row.get("tipo_beneficiamento")),
            peso_entrada_kg=_optional_number(row.get("peso_entrada_kg")),
            peso_saida_kg=_optional_number(row.get("peso_saida_kg")),
            perda_real_pct=_optional_number(row.get("perda_real_pct")),
            perda_cobrada_pct=_optional_number(row.get("perda_cobrada_pct")),
            custo_mo_terceiro=_optional_number(row.get("custo_mo_terceiro")),
            custo_mo_ibrac=_optional_number(row.get("custo_mo_ibrac")),
            custo_frete_ida=_optional_number(row.get("custo_frete_ida")),
            custo_frete_volta=_optional_number(row.get("custo_frete_volta")),
            lme_referencia_kg=_optional_number(row.get("lme_referencia_kg")),
            lucro_perda_valor=_optional_number(row.get("lucro_perda_valor")),
            status=_optional_text(row.get("status")),
            created_at=_optional_text(row.get("created_at")),
        )


@dataclass(frozen=True)
class Sublote:
    id: str
    codigo: str
    peso_kg: float
    custo_unitario_total: Optional[float] = None
    teor_cobre: Optional[float] = None
    status: Optional[str] = None
    dono_id: Optional[str] = None
    entrada_id: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Sublote":
        return cls(
            id=normalize_text(row.get("id")),
            codigo=normalize_text(row.get("codigo")),
            peso_kg=to_number(row.get("peso_kg")),
            custo_unitario_total=_optional_number(row.get("custo_unitario_total")),
            teor_cobre=_optional_number(row.get("teor_cobre")),
            status=_optional_text(row.get("status")),
            dono_id=_optional_text(row.get("dono_id")),
            entrada_id=_optional_text(row.get("entrada_id")),
            created_at=_optional_text(row.get("created_at")),
        )


@dataclass(frozen=True)
class AuditLog:
    id: str
    table_name: str
    action: str
    created_at: str
    record_id: Optional[str] = None
    user_id: Optional[str] = None
    record_data: Optional[dict] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "AuditLog":
        record_data = row.get("record_data")
        return cls(
            id=normalize_text(row.get("id")),
            table_name=normalize_text(row.get("table_name")),
            action=normalize_text(row.get("action")),
            created_at=normalize_text(row.get("created_at")),
            record_id=_optional_text(row.get("record_id")),
            user_id=_optional_text(row.get("user_id")),
            record_data=record_data if isinstance(record_data, dict) else None,
        )
