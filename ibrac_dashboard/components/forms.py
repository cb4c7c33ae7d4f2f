"""Registration forms for intakes and processing runs."""

from __future__ import annotations

from datetime import date
from typing import Any, Callable, Dict, List, Optional, Tuple

import streamlit as st
from streamlit_searchbox import st_searchbox

from ibrac_dashboard.config import TIPO_BENEFICIAMENTO_OPTIONS
from ibrac_dashboard.services.cenarios import calcular_lucro_perda
from ibrac_dashboard.utils.helpers import format_currency, format_number, format_percent

PartnerSearch = Callable[[str], List[Tuple[str, Dict[str, Any]]]]


def render_entrada_form(search_partners: PartnerSearch) -> Tuple[bool, Dict[str, Any]]:
    """Render the intake form and return (submitted, raw payload)."""
    st.markdown("Parceiro / fornecedor")
    parceiro = st_searchbox(
        search_partners,
        placeholder="Buscar por razão social",
        key="entrada_parceiro_search",
        default=None,
        debounce=200,
    )

    with st.form("entrada_form", clear_on_submit=False):
        first, second = st.columns(2)
        codigo = first.text_input("Código *")
        data_entrada = second.date_input("Data de entrada *", value=date.today(), format="DD/MM/YYYY")
        tipo_material = first.text_input("Tipo de material *")
        nota_fiscal = second.text_input("Nota fiscal")
        peso_bruto = first.number_input("Peso bruto (kg) *", min_value=0.0, value=0.0, step=1.0)
        peso_liquido = second.number_input("Peso líquido (kg) *", min_value=0.0, value=0.0, step=1.0)
        valor_unitario = first.number_input("Valor unitário (R$/kg)", min_value=0.0, value=0.0, step=0.01)
        submitted = st.form_submit_button("Registrar entrada", type="primary")

    payload = {
        "codigo": codigo,
        "data_entrada": data_entrada,
        "tipo_material": tipo_material,
        "nota_fiscal": nota_fiscal,
        "parceiro_id": parceiro.get("id") if isinstance(parceiro, dict) else None,
        "peso_bruto_kg": peso_bruto,
        "peso_liquido_kg": peso_liquido,
        "valor_unitario": valor_unitario or None,
    }
    return submitted, payload


def render_lucro_perda_preview(
    peso_entrada: float,
    perda_cobrada_pct: float,
    perda_real_pct: Optional[float],
    lme_referencia_kg: float,
) -> None:
    """Show the loss-gap profit for the values typed so far."""
    if peso_entrada <= 0 or perda_real_pct is None or lme_referencia_kg <= 0:
        st.caption("Informe peso, perdas e LME para ver o lucro na perda.")
        return

    resultado = calcular_lucro_perda(peso_entrada, perda_cobrada_pct, perda_real_pct, lme_referencia_kg)
    columns = st.columns(3)
    columns[0].metric("Diferença de perda", format_percent(resultado.diferenca_pct, 2))
    columns[1].metric("Diferença (kg)", format_number(resultado.diferenca_kg, 2))
    columns[2].metric("Lucro na perda", format_currency(resultado.valor_lucro))
    if resultado.tem_lucro:
        st.success("Perda cobrada acima da real: IBRAC fica com a diferença.")
    elif resultado.diferenca_pct < 0:
        st.warning("Perda real acima da cobrada: a diferença é prejuízo.")


def render_beneficiamento_form() -> Tuple[bool, Dict[str, Any]]:
    """Render the processing form with a live loss-profit preview.

    Inputs live outside ``st.form`` so the preview updates while typing.
    """
    first, second = st.columns(2)
    codigo = first.text_input("Código *", key="benef_codigo")
    data_inicio = second.date_input("Data de início *", value=date.today(), format="DD/MM/YYYY", key="benef_data")
    tipo = first.selectbox("Tipo *", options=TIPO_BENEFICIAMENTO_OPTIONS, key="benef_tipo")
    lme = second.number_input("LME referência (R$/kg)", min_value=0.0, value=0.0, step=0.01, key="benef_lme")
    peso_entrada = first.number_input("Peso de entrada (kg) *", min_value=0.0, value=0.0, step=1.0, key="benef_peso_entrada")
    peso_saida = second.number_input("Peso de saída (kg)", min_value=0.0, value=0.0, step=1.0, key="benef_peso_saida")
    perda_cobrada = first.number_input(
        "Perda cobrada (%) *", min_value=0.0, max_value=100.0, value=0.0, step=0.1, key="benef_perda_cobrada"
    )
    perda_real_input = second.number_input(
        "Perda real (%)",
        min_value=0.0,
        max_value=100.0,
        value=None,
        step=0.1,
        key="benef_perda_real",
        help="Em branco: calculada a partir dos pesos.",
    )
    mo_terceiro = first.number_input("MO terceiro (R$)", min_value=0.0, value=0.0, step=0.01, key="benef_mo_terceiro")
    mo_ibrac = second.number_input("MO IBRAC (R$)", min_value=0.0, value=0.0, step=0.01, key="benef_mo_ibrac")
    frete_ida = first.number_input("Frete ida (R$)", min_value=0.0, value=0.0, step=0.01, key="benef_frete_ida")
    frete_volta = second.number_input("Frete volta (R$)", min_value=0.0, value=0.0, step=0.01, key="benef_frete_volta")

    perda_real = perda_real_input
    if perda_real is None and peso_entrada > 0 and peso_saida:
        perda_real = (peso_entrada - peso_saida) / peso_entrada * 100

    st.markdown("#### Lucro na perda")
    render_lucro_perda_preview(peso_entrada, perda_cobrada, perda_real, lme)

    submitted = st.button("Registrar beneficiamento", type="primary", key="benef_submit")
    payload = {
        "codigo": codigo,
        "data_inicio": data_inicio,
        "tipo_beneficiamento": tipo,
        "peso_entrada_kg": peso_entrada,
        "peso_saida_kg": peso_saida or None,
        "perda_real_pct": perda_real_input,
        "perda_cobrada_pct": perda_cobrada,
        "custo_mo_terceiro": mo_terceiro,
        "custo_mo_ibrac": mo_ibrac,
        "custo_frete_ida": frete_ida,
        "custo_frete_volta": frete_volta,
        "lme_referencia_kg": lme or None,
    }
    return submitted, payload
