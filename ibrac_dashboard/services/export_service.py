"""Spreadsheet and print exports of report rows."""

from __future__ import annotations

import html
import io
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from ibrac_dashboard.config import COMPANY_NAME
from ibrac_dashboard.services.cenarios import detect_scenario_sublote, format_cenario_label
from ibrac_dashboard.utils.helpers import format_date_br, normalize_text, to_number

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
MIN_COLUMN_WIDTH = 10
MAX_COLUMN_WIDTH = 50

ReportRow = Dict[str, Any]


def column_widths(rows: Sequence[Mapping[str, Any]]) -> Dict[str, int]:
    """Width per column: longest cell plus padding, within [10, 50]."""
    widths: Dict[str, int] = {}
    for row in rows:
        for key, value in row.items():
            length = len(normalize_text(value)) + 2
            widths[key] = max(widths.get(key, MIN_COLUMN_WIDTH), length)
    return {key: min(width, MAX_COLUMN_WIDTH) for key, width in widths.items()}


def export_to_excel(
    rows: Sequence[Mapping[str, Any]],
    filename: str,
    sheet_name: str = "Dados",
    now: Optional[datetime] = None,
) -> Tuple[str, bytes]:
    """Render rows to an .xlsx workbook and return (file name, content)."""
    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M")
    dataframe = pd.DataFrame(list(rows))
    widths = column_widths(rows)

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="xlsxwriter") as writer:
        dataframe.to_excel(writer, index=False, sheet_name=sheet_name)
        worksheet = writer.sheets[sheet_name]
        for index, column in enumerate(dataframe.columns):
            worksheet.set_column(index, index, widths.get(column, MIN_COLUMN_WIDTH))

    return f"{filename}_{stamp}.xlsx", output.getvalue()


def build_print_html(
    title: str,
    rows: Sequence[Mapping[str, Any]],
    columns: List[str],
    now: Optional[datetime] = None,
) -> str:
    """Build a self-printing HTML report table."""
    generated_at = (now or datetime.now()).strftime("%d/%m/%Y às %H:%M")
    header = "".join(f"<th>{html.escape(column)}</th>" for column in columns)
    body = "".join(
        "<tr>"
        + "".join(
            f"<td>{html.escape(normalize_text(row.get(column)) or '-')}</td>" for column in columns
        )
        + "</tr>"
        for row in rows
    )
    safe_title = html.escape(title)
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>{safe_title}</title>
  <style>
    body {{ font-family: Arial, sans-serif; margin: 20px; }}
    h1 {{ color: #333; border-bottom: 2px solid #B87333; padding-bottom: 10px; }}
    .info {{ color: #666; margin-bottom: 20px; }}
    table {{ border-collapse: collapse; width: 100%; margin-top: 20px; }}
    th {{ background-color: #B87333; color: white; padding: 12px 8px; text-align: left; }}
    td {{ border: 1px solid #ddd; padding: 8px; }}
    tr:nth-child(even) {{ background-color: #f9f9f9; }}
    @media print {{ body {{ margin: 0; }} table {{ font-size: 10px; }} }}
  </style>
</head>
<body>
  <h1>{COMPANY_NAME} - {safe_title}</h1>
  <p class="info">Gerado em: {generated_at}</p>
  <table>
    <thead><tr>{header}</tr></thead>
    <tbody>{body}</tbody>
  </table>
  <script>window.onload = function() {{ window.print(); }}</script>
</body>
</html>
"""


def _name(row: Mapping[str, Any], relation: str, field: str) -> Optional[str]:
    related = row.get(relation)
    if isinstance(related, Mapping):
        return normalize_text(related.get(field)) or None
    return None


def format_entrada_report(entradas: Sequence[Mapping[str, Any]]) -> List[ReportRow]:
    return [
        {
            "Código": entrada.get("codigo"),
            "Data": format_date_br(entrada.get("data_entrada")),
            "Parceiro": _name(entrada, "parceiro", "razao_social") or _name(entrada, "fornecedor", "razao_social") or "-",
            "Dono": _name(entrada, "dono", "nome") or COMPANY_NAME,
            "Nota Fiscal": entrada.get("nota_fiscal") or "-",
            "Tipo Material": entrada.get("tipo_material"),
            "Peso Bruto (kg)": entrada.get("peso_bruto_kg"),
            "Peso Líquido (kg)": entrada.get("peso_liquido_kg"),
            "Valor Unitário": to_number(entrada.get("valor_unitario")),
            "Valor Total": to_number(entrada.get("valor_total")),
            "Status": entrada.get("status"),
        }
        for entrada in entradas
    ]


def format_saida_report(saidas: Sequence[Mapping[str, Any]]) -> List[ReportRow]:
    return [
        {
            "Código": saida.get("codigo"),
            "Data": format_date_br(saida.get("data_saida")),
            "Tipo": saida.get("tipo_saida"),
            "Cliente": _name(saida, "cliente", "razao_social") or _name(saida, "cliente", "nome_fantasia") or "-",
            "Nota Fiscal": saida.get("nota_fiscal") or "-",
            "Peso Total (kg)": saida.get("peso_total_kg"),
            "Valor Unitário": to_number(saida.get("valor_unitario")),
            "Valor Total": to_number(saida.get("valor_total")),
            "Custos Cobrados": to_number(saida.get("custos_cobrados")),
            "Repasse Dono": to_number(saida.get("valor_repasse_dono")),
            "Status": saida.get("status"),
        }
        for saida in saidas
    ]


def format_beneficiamento_report(beneficiamentos: Sequence[Mapping[str, Any]]) -> List[ReportRow]:
    return [
        {
            "Código": benef.get("codigo"),
            "Data Início": format_date_br(benef.get("data_inicio")),
            "Processo": _name(benef, "processos", "nome") or "-",
            "Tipo": benef.get("tipo_beneficiamento"),
            "Peso Entrada (kg)": to_number(benef.get("peso_entrada_kg")),
            "Peso Saída (kg)": to_number(benef.get("peso_saida_kg")),
            "Perda Real (%)": to_number(benef.get("perda_real_pct")),
            "Perda Cobrada (%)": to_number(benef.get("perda_cobrada_pct")),
            "Custo Frete Ida": to_number(benef.get("custo_frete_ida")),
            "Custo Frete Volta": to_number(benef.get("custo_frete_volta")),
            "Custo MO Terceiro": to_number(benef.get("custo_mo_terceiro")),
            "Custo MO IBRAC": to_number(benef.get("custo_mo_ibrac")),
            "Status": benef.get("status"),
        }
        for benef in beneficiamentos
    ]


def format_estoque_report(sublotes: Sequence[Mapping[str, Any]]) -> List[ReportRow]:
    rows: List[ReportRow] = []
    for sublote in sublotes:
        entrada = sublote.get("entrada") if isinstance(sublote.get("entrada"), Mapping) else {}
        peso = to_number(sublote.get("peso_kg"))
        custo = to_number(sublote.get("custo_unitario_total"))
        rows.append(
            {
                "Código": sublote.get("codigo"),
                "Entrada": normalize_text(entrada.get("codigo")) or "-",
                "Tipo Produto": _name(sublote, "tipo_produto", "nome") or "-",
                "Dono": _name(sublote, "dono", "nome") or COMPANY_NAME,
                "Parceiro": _name(entrada, "parceiro", "razao_social") or "-",
                "Local": _name(sublote, "local_estoque", "nome") or "-",
                "Peso (kg)": peso,
                "Custo Unitário": custo,
                "Valor Total": peso * custo,
                "Status": sublote.get("status"),
            }
        )
    return rows


def format_rastreabilidade_report(sublotes: Sequence[Mapping[str, Any]]) -> List[ReportRow]:
    rows: List[ReportRow] = []
    for sublote in sublotes:
        entrada = sublote.get("entrada") if isinstance(sublote.get("entrada"), Mapping) else {}
        peso = to_number(sublote.get("peso_kg"))
        custo = to_number(sublote.get("custo_unitario_total"))
        rows.append(
            {
                "Código Lote": sublote.get("codigo"),
                "Produto": _name(sublote, "tipo_produto", "nome") or "-",
                "Cenário": format_cenario_label(detect_scenario_sublote(sublote)),
                "Dono": _name(sublote, "dono", "nome") or COMPANY_NAME,
                "Parceiro/Fornecedor": _name(entrada, "parceiro", "razao_social") or "-",
                "Entrada Origem": normalize_text(entrada.get("codigo")) or "-",
                "Local": _name(sublote, "local_estoque", "nome") or "-",
                "Peso (kg)": peso,
                "Custo Unitário (R$)": custo,
                "Valor Total (R$)": peso * custo,
                "Origem Beneficiamento": "Sim" if sublote.get("lote_pai_id") else "Entrada Direta",
                "Data Criação": format_date_br(sublote.get("created_at")),
                "Status": sublote.get("status"),
            }
        )
    return rows
