import pytest

from ibrac_dashboard.services import kpi_service
from ibrac_dashboard.services.cenarios import Cenario

HISTORICO_LME = [
    {"data": "2026-03-01", "cobre_brl_kg": 52.0},
    {"data": "2026-02-01", "cobre_brl_kg": 50.0},
    {"data": "2026-01-01", "cobre_brl_kg": 48.0},
]


def proprio_run():
    beneficiamento = {
        "id": "b1",
        "codigo": "B1",
        "data_inicio": "2026-02-10",
        "peso_entrada_kg": 1000,
        "peso_saida_kg": 950,
        "perda_cobrada_pct": 5,
        "perda_real_pct": 3,
        "lme_referencia_kg": 50,
    }
    item = {
        "beneficiamento_id": "b1",
        "sublote": {"dono_id": None, "entrada": {"id": "e1", "valor_total": 40000, "tipo_entrada": {"gera_custo": True}}},
    }
    return beneficiamento, item


def industrializacao_run():
    beneficiamento = {
        "id": "b2",
        "codigo": "B2",
        "peso_entrada_kg": 500,
        "peso_saida_kg": 480,
        "custo_mo_ibrac": 300,
        "custo_frete_ida": 100,
    }
    item = {
        "beneficiamento_id": "b2",
        "sublote": {"dono_id": "d2", "entrada": {"id": "e2", "tipo_entrada": {"gera_custo": False}}},
    }
    return beneficiamento, item


class TestBuildingBlocks:
    def test_weighted_average_cost(self):
        sublotes = [
            {"peso_kg": 100, "custo_unitario_total": 10, "status": "disponivel"},
            {"peso_kg": 300, "custo_unitario_total": 20, "status": "vendido"},
        ]
        assert kpi_service.custo_medio_ponderado(sublotes) == pytest.approx(17.5)
        assert kpi_service.custo_medio_ponderado(sublotes, only_available=True) == pytest.approx(10)
        assert kpi_service.custo_medio_ponderado([]) == 0

    @pytest.mark.parametrize(
        "target, expected",
        [("2026-02-15", 50.0), ("2026-03-01", 52.0), ("2025-12-01", 52.0), (None, 52.0)],
    )
    def test_lme_for_date(self, target, expected):
        assert kpi_service.get_lme_for_date(HISTORICO_LME, target) == expected

    def test_lme_fallback_without_history(self):
        assert kpi_service.get_lme_for_date([], "2026-01-01", fallback=45.0) == 45.0

    def test_costs_from_linked_documents(self):
        beneficiamento = {
            "id": "b1",
            "peso_saida_kg": 500,
            "custo_mo_terceiro": 100,
            "custo_mo_ibrac": 50,
            "custo_frete_ida": 30,
            "custo_frete_volta": 20,
        }
        documentos = [
            {"beneficiamento_id": "b1", "valor_documento": 1000, "taxa_financeira_valor": 20},
            {"beneficiamento_id": "other", "valor_documento": 9999},
        ]
        custos = kpi_service.calcular_custos_beneficiamento(beneficiamento, [], documentos)
        assert custos.custo_aquisicao == 1000
        assert custos.custo_financeiro == 20
        assert custos.custo_mo == 150
        assert custos.custo_frete == 50
        assert custos.custo_total == 1220
        assert custos.custo_kg == pytest.approx(2.44)

    def test_costs_fall_back_to_distinct_intakes(self):
        itens = [
            {"sublote": {"entrada": {"id": "e1", "valor_total": 800}}},
            {"sublote": {"entrada": {"id": "e1", "valor_total": 800}}},
            {"sublote": {"entrada": {"id": "e2", "valor_total": 200}}},
        ]
        custos = kpi_service.calcular_custos_beneficiamento({"id": "b1"}, itens, [])
        assert custos.custo_aquisicao == 1000
        assert custos.custo_kg == 0

    def test_loss_profit_ignores_negative_gaps(self):
        assert kpi_service.lucro_perda_kpi(1000, 5, 3, 50) == pytest.approx(1000)
        assert kpi_service.lucro_perda_kpi(1000, 3, 5, 50) == 0
        assert kpi_service.lucro_perda_kpi(1000, 5, 3, 0) == 0

    def test_vergalhao_detection(self):
        assert kpi_service.is_vergalhao({"nome": "Vergalhão 8mm"})
        assert kpi_service.is_vergalhao({"nome": "Barra", "codigo": "VERG-01"})
        assert not kpi_service.is_vergalhao({"nome": "Cabo"})
        assert not kpi_service.is_vergalhao(None)


class TestConsolidatedKpis:
    @pytest.fixture
    def inputs(self):
        proprio, proprio_item = proprio_run()
        industrializacao, industrializacao_item = industrializacao_run()
        return {
            "beneficiamentos": [proprio, industrializacao],
            "itens_entrada": [proprio_item, industrializacao_item],
            "documentos": [],
            "historico_lme": [],
            "sublotes_estoque": [
                {"status": "disponivel", "peso_kg": 200, "tipo_produto": {"nome": "Vergalhão"}},
                {"status": "disponivel", "peso_kg": 100, "tipo_produto": {"nome": "Cabo"}},
                {"status": "vendido", "peso_kg": 50, "tipo_produto": {"nome": "Vergalhão"}},
            ],
            "acertos_pendentes": [
                {"tipo": "receita", "dono_id": "d2", "status": "pendente", "valor": 300},
                {"tipo": "despesa", "dono_id": "d2", "status": "pendente", "valor": 80},
                {"tipo": "receita", "dono_id": None, "status": "pendente", "valor": 500},
            ],
        }

    def test_totals(self, inputs):
        kpis, detalhes = kpi_service.calcular_kpis_consolidados(**inputs)

        assert kpis.peso_processado == 1500
        assert kpis.custo_total_processado == pytest.approx(40400)
        assert kpis.custo_medio_vergalhao == pytest.approx(40400 / 1430)
        assert kpis.economia_total == pytest.approx(7500)
        assert kpis.economia_positiva
        assert kpis.lucro_perda_total == pytest.approx(1000)
        assert kpis.lucro_mo_total == pytest.approx(400)
        assert kpis.lucro_total_ibrac == pytest.approx(1400)
        assert kpis.saldo_vergalhao == 200
        assert kpis.repasses_pendentes == 300

        assert [item.codigo for item in detalhes] == ["B1"]
        assert detalhes[0].cenario == Cenario.PROPRIO

    def test_per_scenario_totals(self, inputs):
        kpis, _ = kpi_service.calcular_kpis_consolidados(**inputs)

        assert kpis.cenarios[Cenario.PROPRIO].count == 1
        assert kpis.cenarios[Cenario.PROPRIO].peso == 1000
        assert kpis.cenarios[Cenario.PROPRIO].valor == pytest.approx(7500)
        assert kpis.cenarios[Cenario.INDUSTRIALIZACAO].valor == pytest.approx(400)
        assert kpis.cenarios[Cenario.OPERACAO_TERCEIRO].count == 0

    def test_owner_filter(self, inputs):
        kpis, detalhes = kpi_service.calcular_kpis_consolidados(**inputs, dono_id="d2")
        assert kpis.peso_processado == 500
        assert detalhes == []

    def test_lme_history_used_when_run_has_no_reference(self, inputs):
        proprio = dict(inputs["beneficiamentos"][0], lme_referencia_kg=None)
        kpis, detalhes = kpi_service.calcular_kpis_consolidados(
            [proprio], inputs["itens_entrada"], historico_lme=HISTORICO_LME
        )
        assert detalhes[0].lme_kg == 50.0
        assert kpis.lucro_perda_total == pytest.approx(1000)

    def test_no_runs(self):
        kpis, detalhes = kpi_service.calcular_kpis_consolidados([])
        assert detalhes == []
        assert kpis.peso_processado == 0
        assert set(kpis.cenarios) == set(Cenario)
