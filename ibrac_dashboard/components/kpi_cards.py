"""Dashboard KPI cards."""

from __future__ import annotations

import streamlit as st

from ibrac_dashboard.services.cenarios import Cenario, format_cenario_label
from ibrac_dashboard.services.kpi_service import KPIsConsolidados
from ibrac_dashboard.utils.helpers import format_currency, format_weight


def render_kpi_cards(kpis: KPIsConsolidados) -> None:
    """Render headline KPIs followed by per-scenario totals."""
    row_one = st.columns(4)
    row_one[0].metric("Economia vs LME", format_currency(kpis.economia_total))
    row_one[1].metric("Custo médio vergalhão (R$/kg)", format_currency(kpis.custo_medio_vergalhao))
    row_one[2].metric("Peso processado", format_weight(kpis.peso_processado))
    row_one[3].metric("Saldo vergalhão", format_weight(kpis.saldo_vergalhao))

    row_two = st.columns(4)
    row_two[0].metric("Lucro na perda", format_currency(kpis.lucro_perda_total))
    row_two[1].metric("Receita de serviços", format_currency(kpis.lucro_mo_total))
    row_two[2].metric("Lucro total IBRAC", format_currency(kpis.lucro_total_ibrac))
    row_two[3].metric("Repasses pendentes", format_currency(kpis.repasses_pendentes))

    st.markdown("#### Por cenário")
    scenario_cols = st.columns(len(Cenario))
    for column, cenario in zip(scenario_cols, Cenario):
        totais = kpis.cenarios[cenario]
        column.metric(
            format_cenario_label(cenario),
            format_weight(totais.peso),
            f"{totais.count} beneficiamento(s)",
            delta_color="off",
        )
