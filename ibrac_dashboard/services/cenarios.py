"""Business rules for the three operation scenarios.

* ``proprio``: IBRAC's own material. Cost-generating, owned by IBRAC.
* ``industrializacao``: a client sends material for processing; IBRAC only
  charges for the service. Not cost-generating.
* ``operacao_terceiro``: IBRAC buys, processes and sells on behalf of a third
  owner and keeps a commission.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping, Optional


class Cenario(str, Enum):
    PROPRIO = "proprio"
    INDUSTRIALIZACAO = "industrializacao"
    OPERACAO_TERCEIRO = "operacao_terceiro"


@dataclass(frozen=True)
class CenarioInfo:
    tipo: Cenario
    label: str
    descricao: str
    reconhece_custo: str
    reconhece_lucro: str
    gera_custo_material: bool
    cobra_custos: bool


CENARIOS_CONFIG = {
    Cenario.PROPRIO: CenarioInfo(
        tipo=Cenario.PROPRIO,
        label="Material Próprio",
        descricao="IBRAC compra, beneficia e consome/vende",
        reconhece_custo="ibrac",
        reconhece_lucro="ibrac",
        gera_custo_material=True,
        cobra_custos=False,
    ),
    Cenario.INDUSTRIALIZACAO: CenarioInfo(
        tipo=Cenario.INDUSTRIALIZACAO,
        label="Industrialização",
        descricao="Cliente envia material para beneficiar, IBRAC presta serviço",
        reconhece_custo="ibrac",
        reconhece_lucro="ibrac",
        gera_custo_material=False,
        cobra_custos=True,
    ),
    Cenario.OPERACAO_TERCEIRO: CenarioInfo(
        tipo=Cenario.OPERACAO_TERCEIRO,
        label="Operação Terceiro",
        descricao="IBRAC compra em nome do dono, beneficia e vende, cobra comissão",
        reconhece_custo="operacao",
        reconhece_lucro="ambos",
        gera_custo_material=True,
        cobra_custos=True,
    ),
}


def detect_scenario(gera_custo: bool, dono_id: Optional[str] = None, is_ibrac: bool = False) -> Cenario:
    """Detect the operation scenario from the material's characteristics."""
    if not gera_custo:
        return Cenario.INDUSTRIALIZACAO
    if not dono_id or is_ibrac:
        return Cenario.PROPRIO
    return Cenario.OPERACAO_TERCEIRO


def _nested(row: Optional[Mapping[str, Any]], *path: str) -> Any:
    current: Any = row
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def detect_scenario_sublote(sublote: Mapping[str, Any]) -> Cenario:
    """Detect the scenario of a sublot row with embedded owner and intake type."""
    gera_custo = _nested(sublote, "entrada", "tipo_entrada", "gera_custo")
    is_ibrac = _nested(sublote, "dono", "is_ibrac")
    return detect_scenario(
        gera_custo=True if gera_custo is None else bool(gera_custo),
        dono_id=sublote.get("dono_id"),
        is_ibrac=bool(is_ibrac),
    )


def detect_predominant_scenario(sublotes: Iterable[Mapping[str, Any]]) -> Optional[Cenario]:
    """Scenario of a group of lots, taken from the first lot; None when empty."""
    for sublote in sublotes:
        return detect_scenario_sublote(sublote)
    return None


@dataclass(frozen=True)
class ResultadoSaida:
    valor_bruto: float = 0.0
    custos_totais: float = 0.0
    comissao_ibrac: float = 0.0
    valor_repasse_dono: float = 0.0
    resultado_liquido_dono: float = 0.0
    lucro_ibrac: float = 0.0


def calcular_saida(
    cenario: Cenario,
    peso_total: float,
    valor_unitario: float,
    custo_mo_beneficiamento: float = 0.0,
    custo_perda: float = 0.0,
    custos_adicionais: float = 0.0,
    taxa_operacao_pct: float = 0.0,
) -> ResultadoSaida:
    """Split an outtake's value between IBRAC and the material owner."""
    valor_bruto = peso_total * valor_unitario

    if cenario == Cenario.PROPRIO:
        return ResultadoSaida(valor_bruto=valor_bruto, lucro_ibrac=valor_bruto)

    custos_totais = custo_mo_beneficiamento + custo_perda + custos_adicionais
    if cenario == Cenario.INDUSTRIALIZACAO:
        # The client is charged the service costs only.
        return ResultadoSaida(valor_bruto=custos_totais, custos_totais=custos_totais, lucro_ibrac=custos_totais)

    comissao = valor_bruto * (taxa_operacao_pct / 100)
    liquido_dono = valor_bruto - custos_totais - comissao
    return ResultadoSaida(
        valor_bruto=valor_bruto,
        custos_totais=custos_totais,
        comissao_ibrac=comissao,
        valor_repasse_dono=liquido_dono,
        resultado_liquido_dono=liquido_dono,
        lucro_ibrac=comissao,
    )


@dataclass(frozen=True)
class ResultadoLucroPerda:
    diferenca_pct: float
    diferenca_kg: float
    valor_lucro: float
    tem_lucro: bool


def calcular_lucro_perda(
    peso_entrada: float,
    perda_cobrada_pct: float,
    perda_real_pct: float,
    lme_referencia_kg: float,
) -> ResultadoLucroPerda:
    """Profit (or loss) on the gap between charged and actual material loss.

    When the charged loss exceeds the real one IBRAC keeps the difference,
    valued at the LME copper reference price per kg.
    """
    diferenca_pct = perda_cobrada_pct - perda_real_pct
    diferenca_kg = peso_entrada * (diferenca_pct / 100)
    return ResultadoLucroPerda(
        diferenca_pct=diferenca_pct,
        diferenca_kg=diferenca_kg,
        valor_lucro=diferenca_kg * lme_referencia_kg,
        tem_lucro=diferenca_pct > 0,
    )


def format_cenario_label(cenario: Cenario) -> str:
    info = CENARIOS_CONFIG.get(cenario)
    return info.label if info else str(cenario)
