"""Outtake value simulator per operation scenario."""

from __future__ import annotations

import streamlit as st

from ibrac_dashboard.services.cenarios import CENARIOS_CONFIG, Cenario, calcular_saida, format_cenario_label
from ibrac_dashboard.utils.helpers import format_currency
from ibrac_dashboard.views.common import ViewContext


def render(context: ViewContext) -> None:
    del context
    st.markdown("### Simulador de Saída")

    cenario = st.selectbox("Cenário", list(Cenario), format_func=format_cenario_label, key="sim_cenario")
    st.caption(CENARIOS_CONFIG[cenario].descricao)

    first, second = st.columns(2)
    peso_total = first.number_input("Peso total (kg)", min_value=0.0, value=0.0, step=1.0, key="sim_peso")
    valor_unitario = second.number_input("Valor unitário (R$/kg)", min_value=0.0, value=0.0, step=0.01, key="sim_valor")
    custo_mo = first.number_input("Custo MO beneficiamento (R$)", min_value=0.0, value=0.0, step=0.01, key="sim_mo")
    custo_perda = second.number_input("Custo da perda (R$)", min_value=0.0, value=0.0, step=0.01, key="sim_perda")
    custos_adicionais = first.number_input("Custos adicionais (R$)", min_value=0.0, value=0.0, step=0.01, key="sim_adicionais")
    taxa = second.number_input(
        "Taxa de operação (%)",
        min_value=0.0,
        max_value=100.0,
        value=0.0,
        step=0.1,
        key="sim_taxa",
        disabled=cenario != Cenario.OPERACAO_TERCEIRO,
    )

    resultado = calcular_saida(cenario, peso_total, valor_unitario, custo_mo, custo_perda, custos_adicionais, taxa)

    columns = st.columns(3)
    columns[0].metric("Valor bruto", format_currency(resultado.valor_bruto))
    columns[1].metric("Custos totais", format_currency(resultado.custos_totais))
    columns[2].metric("Lucro IBRAC", format_currency(resultado.lucro_ibrac))
    if cenario == Cenario.OPERACAO_TERCEIRO:
        columns = st.columns(2)
        columns[0].metric("Comissão IBRAC", format_currency(resultado.comissao_ibrac))
        columns[1].metric("Repasse ao dono", format_currency(resultado.valor_repasse_dono))
