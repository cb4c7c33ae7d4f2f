from datetime import datetime

from ibrac_dashboard.services import export_service

NOW = datetime(2026, 3, 5, 14, 7)


class TestExcelExport:
    def test_file_name_carries_timestamp(self):
        file_name, content = export_service.export_to_excel([{"Código": "E-1", "Peso": 10}], "entradas", now=NOW)
        assert file_name == "entradas_20260305_1407.xlsx"
        assert content.startswith(b"PK")

    def test_empty_rows_still_produce_a_workbook(self):
        _, content = export_service.export_to_excel([], "vazio", now=NOW)
        assert content.startswith(b"PK")

    def test_column_widths_are_bounded(self):
        widths = export_service.column_widths([{"a": "x", "b": "y" * 80, "c": "z" * 15}])
        assert widths == {"a": 10, "b": 50, "c": 17}


class TestPrintHtml:
    def test_header_and_timestamp(self):
        html = export_service.build_print_html("Relatório de Entradas", [{"Código": "E-1"}], ["Código"], now=NOW)
        assert "IBRAC - Relatório de Entradas" in html
        assert "Gerado em: 05/03/2026 às 14:07" in html
        assert "<td>E-1</td>" in html

    def test_values_are_escaped(self):
        html = export_service.build_print_html("<b>", [{"Nome": "<script>x</script>"}], ["Nome"], now=NOW)
        assert "<script>x</script>" not in html
        assert "&lt;script&gt;" in html
        assert "&lt;b&gt;" in html

    def test_missing_values_render_as_dash(self):
        html = export_service.build_print_html("T", [{"Nome": None}], ["Nome"], now=NOW)
        assert "<td>-</td>" in html


class TestReportRows:
    def test_entrada_without_owner_belongs_to_ibrac(self):
        [row] = export_service.format_entrada_report(
            [
                {
                    "codigo": "E-1",
                    "data_entrada": "2026-01-15",
                    "parceiro": {"razao_social": "Metais Alfa"},
                    "dono": None,
                    "valor_total": None,
                }
            ]
        )
        assert row["Data"] == "15/01/2026"
        assert row["Parceiro"] == "Metais Alfa"
        assert row["Dono"] == "IBRAC"
        assert row["Nota Fiscal"] == "-"
        assert row["Valor Total"] == 0

    def test_saida_client_falls_back_to_trade_name(self):
        first, second = export_service.format_saida_report(
            [
                {
                    "codigo": "S-1",
                    "data_saida": "2026-03-02",
                    "tipo_saida": "venda",
                    "cliente": {"razao_social": None, "nome_fantasia": "Cobre Sul"},
                    "peso_total_kg": 500,
                    "valor_unitario": 42.0,
                    "valor_total": 21000.0,
                    "status": "finalizada",
                },
                {"codigo": "S-2", "data_saida": "2026-03-03", "cliente": None},
            ]
        )
        assert first["Data"] == "02/03/2026"
        assert first["Cliente"] == "Cobre Sul"
        assert first["Valor Total"] == 21000.0
        assert first["Custos Cobrados"] == 0
        assert second["Cliente"] == "-"
        assert second["Nota Fiscal"] == "-"
        assert second["Valor Unitário"] == 0
        assert second["Repasse Dono"] == 0

    def test_estoque_total_value(self):
        [row] = export_service.format_estoque_report(
            [{"codigo": "S-1", "peso_kg": 200, "custo_unitario_total": 45.5, "entrada": {"codigo": "E-1"}}]
        )
        assert row["Valor Total"] == 9100
        assert row["Entrada"] == "E-1"
        assert row["Local"] == "-"

    def test_traceability_origin_and_scenario(self):
        rows = export_service.format_rastreabilidade_report(
            [
                {"codigo": "S-1", "lote_pai_id": "S-0", "dono_id": None},
                {
                    "codigo": "S-2",
                    "dono_id": "d1",
                    "dono": {"nome": "Cliente X", "is_ibrac": False},
                    "entrada": {"tipo_entrada": {"gera_custo": True}},
                },
            ]
        )
        assert rows[0]["Origem Beneficiamento"] == "Sim"
        assert rows[0]["Cenário"] == "Material Próprio"
        assert rows[1]["Origem Beneficiamento"] == "Entrada Direta"
        assert rows[1]["Dono"] == "Cliente X"
        assert rows[1]["Cenário"] == "Operação Terceiro"

    def test_beneficiamento_defaults(self):
        [row] = export_service.format_beneficiamento_report([{"codigo": "B-1", "processos": {"nome": "Trefila"}}])
        assert row["Processo"] == "Trefila"
        assert row["Peso Saída (kg)"] == 0
