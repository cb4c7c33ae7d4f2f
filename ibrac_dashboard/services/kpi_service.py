"""Centralized KPI calculations shared by the dashboard and finance views."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from ibrac_dashboard.services.cenarios import Cenario, detect_predominant_scenario
from ibrac_dashboard.utils.helpers import normalize_text, parse_date, to_number

Row = Mapping[str, Any]


@dataclass(frozen=True)
class CustosBeneficiamento:
    custo_aquisicao: float
    custo_mo: float
    custo_frete: float
    custo_financeiro: float
    custo_total: float
    custo_kg: float


@dataclass(frozen=True)
class EconomiaBeneficiamento:
    codigo: str
    peso_entrada: float
    peso_saida: float
    custos: CustosBeneficiamento
    lme_kg: float
    economia_kg: float
    economia_total: float
    cenario: Cenario


@dataclass
class CenarioTotais:
    peso: float = 0.0
    count: int = 0
    valor: float = 0.0


@dataclass
class KPIsConsolidados:
    economia_total: float = 0.0
    economia_positiva: bool = True
    custo_medio_vergalhao: float = 0.0
    custo_total_processado: float = 0.0
    peso_processado: float = 0.0
    saldo_vergalhao: float = 0.0
    lucro_perda_total: float = 0.0
    lucro_mo_total: float = 0.0
    lucro_comissao_total: float = 0.0
    lucro_total_ibrac: float = 0.0
    repasses_pendentes: float = 0.0
    cenarios: Dict[Cenario, CenarioTotais] = field(
        default_factory=lambda: {cenario: CenarioTotais() for cenario in Cenario}
    )


def custo_medio_ponderado(sublotes: Optional[Iterable[Row]], only_available: bool = False) -> float:
    """Weight-averaged unit cost of the given lots."""
    peso_total = 0.0
    custo_total = 0.0
    for sublote in sublotes or []:
        if only_available and sublote.get("status") != "disponivel":
            continue
        peso = to_number(sublote.get("peso_kg"))
        peso_total += peso
        custo_total += peso * to_number(sublote.get("custo_unitario_total"))
    return custo_total / peso_total if peso_total > 0 else 0.0


def get_lme_for_date(historico_lme: Optional[Sequence[Row]], target_date: object, fallback: float = 0.0) -> float:
    """Return the copper BRL/kg price in force on ``target_date``.

    ``historico_lme`` is ordered newest first; the first entry not after the
    date wins, otherwise the newest entry is used.
    """
    if not historico_lme:
        return fallback

    def price(row: Row) -> float:
        value = row.get("cobre_brl_kg")
        return fallback if value is None else to_number(value, fallback)

    reference = parse_date(target_date)
    if reference is None:
        return price(historico_lme[0])

    for row in historico_lme:
        lme_date = parse_date(row.get("data"))
        if lme_date is not None and lme_date <= reference:
            return price(row)
    return price(historico_lme[0])


def calcular_custos_beneficiamento(
    beneficiamento: Row,
    itens_entrada: Sequence[Row],
    documentos: Sequence[Row],
) -> CustosBeneficiamento:
    """Cost breakdown of one processing run.

    Acquisition cost comes from linked documents; without documents it falls
    back to the value of each distinct intake feeding the run.
    """
    benef_id = beneficiamento.get("id")
    docs = [doc for doc in documentos if doc.get("beneficiamento_id") == benef_id]
    custo_aquisicao = sum(to_number(doc.get("valor_documento")) for doc in docs)
    custo_financeiro = sum(to_number(doc.get("taxa_financeira_valor")) for doc in docs)

    custo_mo = to_number(beneficiamento.get("custo_mo_terceiro")) + to_number(beneficiamento.get("custo_mo_ibrac"))
    custo_frete = to_number(beneficiamento.get("custo_frete_ida")) + to_number(beneficiamento.get("custo_frete_volta"))

    if custo_aquisicao == 0 and itens_entrada:
        seen = set()
        for item in itens_entrada:
            entrada = (item.get("sublote") or {}).get("entrada") or {}
            entrada_id = entrada.get("id")
            if entrada_id and entrada_id not in seen:
                seen.add(entrada_id)
                custo_aquisicao += to_number(entrada.get("valor_total"))

    custo_total = custo_aquisicao + custo_financeiro + custo_mo + custo_frete
    peso_saida = to_number(beneficiamento.get("peso_saida_kg"))
    return CustosBeneficiamento(
        custo_aquisicao=custo_aquisicao,
        custo_mo=custo_mo,
        custo_frete=custo_frete,
        custo_financeiro=custo_financeiro,
        custo_total=custo_total,
        custo_kg=custo_total / peso_saida if peso_saida > 0 else 0.0,
    )


def lucro_perda_kpi(peso_entrada: float, perda_cobrada: float, perda_real: float, lme_kg: float) -> float:
    """Loss-gap profit for KPI totals; negative gaps do not count."""
    if perda_cobrada <= perda_real or lme_kg <= 0:
        return 0.0
    return peso_entrada * ((perda_cobrada - perda_real) / 100) * lme_kg


def calcular_economia_vs_lme(peso_saida: float, custo_kg: float, lme_kg: float) -> tuple[float, float]:
    """Return (savings per kg, total savings) against the LME price."""
    if lme_kg <= 0 or peso_saida <= 0:
        return 0.0, 0.0
    economia_kg = lme_kg - custo_kg
    return economia_kg, economia_kg * peso_saida


def is_vergalhao(tipo_produto: Optional[Row]) -> bool:
    """Whether a product type is copper rebar."""
    if not tipo_produto:
        return False
    nome = normalize_text(tipo_produto.get("nome")).lower()
    codigo = normalize_text(tipo_produto.get("codigo")).lower()
    return "vergalhão" in nome or "verg" in codigo


def calcular_kpis_consolidados(
    beneficiamentos: Optional[Sequence[Row]],
    itens_entrada: Optional[Sequence[Row]] = None,
    documentos: Optional[Sequence[Row]] = None,
    historico_lme: Optional[Sequence[Row]] = None,
    sublotes_estoque: Optional[Sequence[Row]] = None,
    acertos_pendentes: Optional[Sequence[Row]] = None,
    dono_id: Optional[str] = None,
) -> tuple[KPIsConsolidados, List[EconomiaBeneficiamento]]:
    """Aggregate processing runs into the dashboard KPIs.

    When ``dono_id`` is set only runs whose first lot belongs to that owner
    are counted.
    """
    kpis = KPIsConsolidados()
    detalhes: List[EconomiaBeneficiamento] = []
    if not beneficiamentos:
        return kpis, detalhes

    itens_entrada = itens_entrada or []
    documentos = documentos or []
    custo_total_vergalhao = 0.0
    peso_total_saida = 0.0

    for benef in beneficiamentos:
        itens = [item for item in itens_entrada if item.get("beneficiamento_id") == benef.get("id")]
        lotes = [item.get("sublote") or {} for item in itens]
        cenario = detect_predominant_scenario(lotes) or Cenario.PROPRIO
        benef_dono = lotes[0].get("dono_id") if lotes else None

        if dono_id and benef_dono != dono_id:
            continue

        peso_entrada = to_number(benef.get("peso_entrada_kg"))
        peso_saida = to_number(benef.get("peso_saida_kg"))
        kpis.peso_processado += peso_entrada
        kpis.cenarios[cenario].peso += peso_entrada
        kpis.cenarios[cenario].count += 1

        custos = calcular_custos_beneficiamento(benef, itens, documentos)
        custo_total_vergalhao += custos.custo_total
        peso_total_saida += peso_saida
        kpis.custo_total_processado += custos.custo_total

        lme_kg = to_number(benef.get("lme_referencia_kg")) or get_lme_for_date(historico_lme, benef.get("data_inicio"))

        kpis.lucro_perda_total += lucro_perda_kpi(
            peso_entrada,
            to_number(benef.get("perda_cobrada_pct")),
            to_number(benef.get("perda_real_pct")),
            lme_kg,
        )

        if cenario == Cenario.INDUSTRIALIZACAO:
            receita = custos.custo_mo + custos.custo_frete
            kpis.lucro_mo_total += receita
            kpis.cenarios[cenario].valor += receita

        if lme_kg > 0 and peso_saida > 0:
            economia_kg, economia_total = calcular_economia_vs_lme(peso_saida, custos.custo_kg, lme_kg)
            kpis.economia_total += economia_total
            detalhes.append(
                EconomiaBeneficiamento(
                    codigo=normalize_text(benef.get("codigo")),
                    peso_entrada=peso_entrada,
                    peso_saida=peso_saida,
                    custos=custos,
                    lme_kg=lme_kg,
                    economia_kg=economia_kg,
                    economia_total=economia_total,
                    cenario=cenario,
                )
            )
            if cenario == Cenario.PROPRIO:
                kpis.cenarios[cenario].valor += economia_total

    kpis.custo_medio_vergalhao = custo_total_vergalhao / peso_total_saida if peso_total_saida > 0 else 0.0
    kpis.economia_positiva = kpis.economia_total >= 0

    kpis.saldo_vergalhao = sum(
        to_number(sublote.get("peso_kg"))
        for sublote in sublotes_estoque or []
        if sublote.get("status") == "disponivel" and is_vergalhao(sublote.get("tipo_produto"))
    )
    kpis.repasses_pendentes = sum(
        to_number(acerto.get("valor"))
        for acerto in acertos_pendentes or []
        if acerto.get("tipo") == "receita" and acerto.get("dono_id") and acerto.get("status") == "pendente"
    )
    kpis.lucro_total_ibrac = kpis.lucro_perda_total + kpis.lucro_mo_total + kpis.lucro_comissao_total
    return kpis, detalhes
