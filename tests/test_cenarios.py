import pytest

from ibrac_dashboard.services.cenarios import (
    CENARIOS_CONFIG,
    Cenario,
    calcular_lucro_perda,
    calcular_saida,
    detect_predominant_scenario,
    detect_scenario,
    detect_scenario_sublote,
    format_cenario_label,
)


class TestDetectScenario:
    def test_non_cost_material_is_industrializacao(self):
        assert detect_scenario(gera_custo=False, dono_id="d1") == Cenario.INDUSTRIALIZACAO

    def test_material_without_owner_is_proprio(self):
        assert detect_scenario(gera_custo=True) == Cenario.PROPRIO

    def test_ibrac_owner_is_proprio(self):
        assert detect_scenario(gera_custo=True, dono_id="ibrac", is_ibrac=True) == Cenario.PROPRIO

    def test_third_party_owner(self):
        assert detect_scenario(gera_custo=True, dono_id="d1") == Cenario.OPERACAO_TERCEIRO

    def test_sublote_with_embedded_relations(self):
        sublote = {
            "dono_id": "d1",
            "dono": {"is_ibrac": False},
            "entrada": {"tipo_entrada": {"gera_custo": True}},
        }
        assert detect_scenario_sublote(sublote) == Cenario.OPERACAO_TERCEIRO

    def test_sublote_missing_intake_type_counts_as_cost_generating(self):
        assert detect_scenario_sublote({"dono_id": None, "entrada": None}) == Cenario.PROPRIO

    def test_sublote_of_client_material(self):
        sublote = {"dono_id": "d1", "entrada": {"tipo_entrada": {"gera_custo": False}}}
        assert detect_scenario_sublote(sublote) == Cenario.INDUSTRIALIZACAO

    def test_predominant_scenario_follows_first_lot(self):
        lotes = [{"dono_id": "d1"}, {"dono_id": None}]
        assert detect_predominant_scenario(lotes) == Cenario.OPERACAO_TERCEIRO
        assert detect_predominant_scenario([]) is None


class TestCalcularSaida:
    def test_proprio_keeps_full_value(self):
        resultado = calcular_saida(Cenario.PROPRIO, 100, 10, custo_mo_beneficiamento=50)
        assert resultado.valor_bruto == 1000
        assert resultado.lucro_ibrac == 1000
        assert resultado.custos_totais == 0

    def test_industrializacao_charges_costs_only(self):
        resultado = calcular_saida(Cenario.INDUSTRIALIZACAO, 100, 10, 100, 50, 25)
        assert resultado.valor_bruto == 175
        assert resultado.lucro_ibrac == 175
        assert resultado.valor_repasse_dono == 0

    def test_operacao_terceiro_splits_commission(self):
        resultado = calcular_saida(Cenario.OPERACAO_TERCEIRO, 100, 10, 60, 40, 0, taxa_operacao_pct=5)
        assert resultado.valor_bruto == 1000
        assert resultado.custos_totais == 100
        assert resultado.comissao_ibrac == pytest.approx(50)
        assert resultado.valor_repasse_dono == pytest.approx(850)
        assert resultado.lucro_ibrac == pytest.approx(50)


class TestLucroPerda:
    def test_charged_loss_above_real_is_profit(self):
        resultado = calcular_lucro_perda(1000, 5, 3, 50)
        assert resultado.diferenca_pct == 2
        assert resultado.diferenca_kg == pytest.approx(20)
        assert resultado.valor_lucro == pytest.approx(1000)
        assert resultado.tem_lucro

    def test_real_loss_above_charged_is_negative(self):
        resultado = calcular_lucro_perda(1000, 3, 5, 50)
        assert resultado.valor_lucro == pytest.approx(-1000)
        assert not resultado.tem_lucro


def test_every_scenario_has_a_label():
    assert set(CENARIOS_CONFIG) == set(Cenario)
    assert format_cenario_label(Cenario.PROPRIO) == "Material Próprio"
