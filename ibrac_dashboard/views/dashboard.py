"""Home dashboard: consolidated KPIs over finished processing runs."""

from __future__ import annotations

from typing import List

import pandas as pd
import streamlit as st

from ibrac_dashboard.components.kpi_cards import render_kpi_cards
from ibrac_dashboard.config import (
    ACERTOS_TABLE,
    BENEF_DOCUMENTOS_TABLE,
    BENEF_ITENS_ENTRADA_TABLE,
    BENEFICIAMENTOS_TABLE,
    DONOS_TABLE,
    HISTORICO_LME_TABLE,
    ITENS_ENTRADA_SELECT,
    SUBLOTES_TABLE,
)
from ibrac_dashboard.services import data_source, kpi_service
from ibrac_dashboard.services.cenarios import format_cenario_label
from ibrac_dashboard.services.data_source import OrderBy
from ibrac_dashboard.services.errors import DataSourceError
from ibrac_dashboard.services.filter_service import ALL_OPTION
from ibrac_dashboard.utils.helpers import format_currency, format_weight
from ibrac_dashboard.views.common import ViewContext, options_from_rows


def _detail_frame(detalhes: List[kpi_service.EconomiaBeneficiamento]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "Código": item.codigo,
                "Cenário": format_cenario_label(item.cenario),
                "Peso Entrada": format_weight(item.peso_entrada),
                "Peso Saída": format_weight(item.peso_saida),
                "Custo Total": format_currency(item.custos.custo_total),
                "Custo/kg": format_currency(item.custos.custo_kg),
                "LME/kg": format_currency(item.lme_kg),
                "Economia": format_currency(item.economia_total),
            }
            for item in detalhes
        ]
    )


def render(context: ViewContext) -> None:
    st.markdown("### Painel")
    client = context.client

    try:
        donos = data_source.fetch_all(client, DONOS_TABLE, "id, nome", order_by=OrderBy("nome", ascending=True))
        dono_options = options_from_rows(donos, "nome")
        dono_label = st.selectbox("Dono do material", [ALL_OPTION, *dono_options.keys()], key="dashboard_dono")
        dono_id = dono_options.get(dono_label)

        beneficiamentos = data_source.fetch_all(client, BENEFICIAMENTOS_TABLE, filters={"status": "finalizado"})
        itens_entrada = data_source.fetch_all(
            client, BENEF_ITENS_ENTRADA_TABLE, ITENS_ENTRADA_SELECT, order_by=OrderBy("beneficiamento_id")
        )
        documentos = data_source.fetch_all(client, BENEF_DOCUMENTOS_TABLE)
        historico_lme = data_source.fetch_all(client, HISTORICO_LME_TABLE, order_by=OrderBy("data", ascending=False))
        sublotes = data_source.fetch_all(
            client,
            SUBLOTES_TABLE,
            "*, tipo_produto:tipos_produto(nome, codigo)",
            filters={"status": "disponivel", "dono_id": dono_id},
        )
        acertos = data_source.fetch_all(client, ACERTOS_TABLE, filters={"status": "pendente"})
    except DataSourceError as exc:
        st.error(f"Erro ao carregar indicadores: {exc.detail}")
        return

    kpis, detalhes = kpi_service.calcular_kpis_consolidados(
        beneficiamentos,
        itens_entrada,
        documentos,
        historico_lme,
        sublotes,
        acertos,
        dono_id=dono_id,
    )
    render_kpi_cards(kpis)

    st.markdown("#### Economia por beneficiamento")
    if not detalhes:
        st.info("Nenhum beneficiamento finalizado com LME de referência.")
        return
    st.dataframe(_detail_frame(detalhes), hide_index=True, width="stretch")
