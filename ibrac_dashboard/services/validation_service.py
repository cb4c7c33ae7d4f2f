"""Validation logic for registration forms."""

from __future__ import annotations

import re
from datetime import date
from typing import Any, Dict, Mapping, Optional, Tuple

from ibrac_dashboard.config import TIPO_BENEFICIAMENTO_OPTIONS
from ibrac_dashboard.services.cenarios import calcular_lucro_perda
from ibrac_dashboard.utils.helpers import normalize_text, parse_date

STRICT_ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

FieldResult = Tuple[bool, str, Any]
PayloadResult = Tuple[bool, Optional[str], Dict[str, Any]]


def validate_date(value: object, field_name: str, required: bool = True) -> FieldResult:
    """Validate YYYY-MM-DD dates that must not be in the future."""
    if isinstance(value, date):
        parsed_value: Optional[date] = value
    else:
        raw_value = normalize_text(value)
        if not raw_value:
            if required:
                return False, f"{field_name} é obrigatório.", None
            return True, "", None
        if not STRICT_ISO_DATE_PATTERN.fullmatch(raw_value):
            return False, f"{field_name} deve estar no formato AAAA-MM-DD.", None
        parsed_value = parse_date(raw_value)
        if parsed_value is None:
            return False, f"{field_name} não é uma data válida.", None

    if parsed_value > date.today():
        return False, f"{field_name} não pode estar no futuro.", None

    return True, "", parsed_value.isoformat()


def validate_text(value: object, field_name: str, required: bool = True, max_length: int = 120) -> FieldResult:
    """Validate and normalize free text."""
    text = normalize_text(value)
    if not text:
        if required:
            return False, f"{field_name} é obrigatório.", None
        return True, "", None
    if len(text) > max_length:
        return False, f"{field_name} deve ter no máximo {max_length} caracteres.", None
    return True, "", text


def validate_number(
    value: object,
    field_name: str,
    required: bool = True,
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
    strictly_positive: bool = False,
) -> FieldResult:
    """Validate a numeric field, accepting pt-BR decimal commas."""
    if value is None or normalize_text(value) == "":
        if required:
            return False, f"{field_name} é obrigatório.", None
        return True, "", None

    if isinstance(value, bool):
        return False, f"{field_name} deve ser numérico.", None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(normalize_text(value).replace(",", "."))
        except ValueError:
            return False, f"{field_name} deve ser numérico.", None

    if number != number:
        return False, f"{field_name} deve ser numérico.", None
    if strictly_positive and number <= 0:
        return False, f"{field_name} deve ser maior que zero.", None
    if minimum is not None and number < minimum:
        return False, f"{field_name} não pode ser menor que {minimum:g}.", None
    if maximum is not None and number > maximum:
        return False, f"{field_name} não pode ser maior que {maximum:g}.", None
    return True, "", number


def validate_percent(value: object, field_name: str, required: bool = True) -> FieldResult:
    return validate_number(value, field_name, required=required, minimum=0, maximum=100)


def _collect(checks: Mapping[str, FieldResult]) -> PayloadResult:
    normalized: Dict[str, Any] = {}
    for key, (valid, error_message, value) in checks.items():
        if not valid:
            return False, error_message, {}
        normalized[key] = value
    return True, None, normalized


def validate_entrada_payload(payload: Mapping[str, Any]) -> PayloadResult:
    """Validate an intake registration and derive its total value."""
    valid, error_message, normalized = _collect(
        {
            "codigo": validate_text(payload.get("codigo"), "Código", max_length=40),
            "data_entrada": validate_date(payload.get("data_entrada"), "Data de entrada"),
            "tipo_material": validate_text(payload.get("tipo_material"), "Tipo de material"),
            "nota_fiscal": validate_text(payload.get("nota_fiscal"), "Nota fiscal", required=False, max_length=40),
            "parceiro_id": validate_text(payload.get("parceiro_id"), "Parceiro", required=False),
            "peso_bruto_kg": validate_number(payload.get("peso_bruto_kg"), "Peso bruto", strictly_positive=True),
            "peso_liquido_kg": validate_number(payload.get("peso_liquido_kg"), "Peso líquido", strictly_positive=True),
            "valor_unitario": validate_number(payload.get("valor_unitario"), "Valor unitário", required=False, minimum=0),
        }
    )
    if not valid:
        return False, error_message, {}

    if normalized["peso_liquido_kg"] > normalized["peso_bruto_kg"]:
        return False, "Peso líquido não pode exceder o peso bruto.", {}

    valor_unitario = normalized["valor_unitario"]
    normalized["valor_total"] = (
        round(normalized["peso_liquido_kg"] * valor_unitario, 2) if valor_unitario is not None else None
    )
    normalized["status"] = "pendente"
    return True, None, normalized


def validate_beneficiamento_payload(payload: Mapping[str, Any]) -> PayloadResult:
    """Validate a processing registration and compute its loss-gap profit.

    When the real loss is left blank and an output weight is given, the real
    loss is derived from the two weights.
    """
    valid, error_message, normalized = _collect(
        {
            "codigo": validate_text(payload.get("codigo"), "Código", max_length=40),
            "data_inicio": validate_date(payload.get("data_inicio"), "Data de início"),
            "tipo_beneficiamento": validate_text(payload.get("tipo_beneficiamento"), "Tipo"),
            "peso_entrada_kg": validate_number(payload.get("peso_entrada_kg"), "Peso de entrada", strictly_positive=True),
            "peso_saida_kg": validate_number(payload.get("peso_saida_kg"), "Peso de saída", required=False, minimum=0),
            "perda_real_pct": validate_percent(payload.get("perda_real_pct"), "Perda real", required=False),
            "perda_cobrada_pct": validate_percent(payload.get("perda_cobrada_pct"), "Perda cobrada"),
            "custo_mo_terceiro": validate_number(payload.get("custo_mo_terceiro"), "MO terceiro", required=False, minimum=0),
            "custo_mo_ibrac": validate_number(payload.get("custo_mo_ibrac"), "MO IBRAC", required=False, minimum=0),
            "custo_frete_ida": validate_number(payload.get("custo_frete_ida"), "Frete ida", required=False, minimum=0),
            "custo_frete_volta": validate_number(payload.get("custo_frete_volta"), "Frete volta", required=False, minimum=0),
            "lme_referencia_kg": validate_number(payload.get("lme_referencia_kg"), "LME referência", required=False, minimum=0),
        }
    )
    if not valid:
        return False, error_message, {}

    if normalized["tipo_beneficiamento"] not in TIPO_BENEFICIAMENTO_OPTIONS:
        return False, f"Tipo deve ser um de: {', '.join(TIPO_BENEFICIAMENTO_OPTIONS)}.", {}

    peso_entrada = normalized["peso_entrada_kg"]
    peso_saida = normalized["peso_saida_kg"]
    if peso_saida is not None and peso_saida > peso_entrada:
        return False, "Peso de saída não pode exceder o peso de entrada.", {}

    if normalized["perda_real_pct"] is None and peso_saida is not None:
        normalized["perda_real_pct"] = round((peso_entrada - peso_saida) / peso_entrada * 100, 4)

    if normalized["perda_real_pct"] is not None and normalized["lme_referencia_kg"] is not None:
        resultado = calcular_lucro_perda(
            peso_entrada,
            normalized["perda_cobrada_pct"],
            normalized["perda_real_pct"],
            normalized["lme_referencia_kg"],
        )
        normalized["lucro_perda_kg"] = round(resultado.diferenca_kg, 4)
        normalized["lucro_perda_valor"] = round(resultado.valor_lucro, 2)

    normalized["status"] = "em_andamento"
    return True, None, normalized
