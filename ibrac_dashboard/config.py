"""Application configuration constants."""

import os
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parent
ASSETS_DIR = ROOT_DIR / "assets"

load_dotenv()

SUPABASE_URL = os.getenv("SUPABASE_URL", "")
SUPABASE_KEY = os.getenv("SUPABASE_KEY", "")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_JSON = os.getenv("LOG_JSON", "false").lower() in {"1", "true", "yes"}

APP_TITLE = "IBRAC - Gestão de Cobre"
COMPANY_NAME = "IBRAC"

DEFAULT_PAGE_SIZE = 50
PAGE_SIZE_OPTIONS = [25, 50, 100, 200]
DEFAULT_ORDER_COLUMN = "created_at"

ENTRADAS_TABLE = "entradas"
BENEFICIAMENTOS_TABLE = "beneficiamentos"
SUBLOTES_TABLE = "sublotes"
SAIDAS_TABLE = "saidas"
PARCEIROS_TABLE = "parceiros"
DONOS_TABLE = "donos_material"
BENEF_ITENS_ENTRADA_TABLE = "beneficiamento_itens_entrada"
BENEF_DOCUMENTOS_TABLE = "beneficiamento_entradas"
HISTORICO_LME_TABLE = "historico_lme"
ACERTOS_TABLE = "acertos_financeiros"
AUDIT_LOGS_TABLE = "audit_logs"
USER_ROLES_TABLE = "user_roles"

SUBLOTE_STATUS_OPTIONS = ["disponivel", "reservado", "em_beneficiamento", "vendido", "consumido"]
ENTRADA_STATUS_OPTIONS = ["pendente", "conferido", "finalizado"]
BENEFICIAMENTO_STATUS_OPTIONS = ["em_andamento", "finalizado", "cancelado"]
TIPO_BENEFICIAMENTO_OPTIONS = ["interno", "terceiro"]
AUDIT_TABLE_OPTIONS = [ENTRADAS_TABLE, BENEFICIAMENTOS_TABLE, SUBLOTES_TABLE, SAIDAS_TABLE, PARCEIROS_TABLE]

PARTNER_SEARCH_LIMIT = 20

SUBLOTE_EXPORT_SELECT = (
    "*, tipo_produto:tipos_produto(nome, codigo), dono:donos_material(nome, is_ibrac), "
    "local_estoque:locais_estoque(nome), "
    "entrada:entradas(codigo, parceiro:parceiros(razao_social), tipo_entrada:tipos_entrada(gera_custo))"
)
ENTRADA_EXPORT_SELECT = "*, parceiro:parceiros(razao_social), dono:donos_material(nome)"
BENEFICIAMENTO_EXPORT_SELECT = "*, processos(nome)"
SAIDA_EXPORT_SELECT = "*, cliente:parceiros(razao_social, nome_fantasia)"
ITENS_ENTRADA_SELECT = (
    "beneficiamento_id, sublote:sublotes(dono_id, dono:donos_material(id, nome, is_ibrac, taxa_operacao_pct), "
    "entrada:entradas(id, valor_total, peso_liquido_kg, tipo_entrada:tipos_entrada(gera_custo)))"
)

ENTRADA_COLUMNS = [
    "codigo",
    "data_entrada",
    "tipo_material",
    "nota_fiscal",
    "peso_bruto_kg",
    "peso_liquido_kg",
    "valor_unitario",
    "valor_total",
    "status",
]

BENEFICIAMENTO_COLUMNS = [
    "codigo",
    "data_inicio",
    "tipo_beneficiamento",
    "peso_entrada_kg",
    "peso_saida_kg",
    "perda_real_pct",
    "perda_cobrada_pct",
    "lucro_perda_valor",
    "status",
]

SUBLOTE_COLUMNS = [
    "codigo",
    "peso_kg",
    "custo_unitario_total",
    "teor_cobre",
    "status",
    "created_at",
]

ACERTO_COLUMNS = [
    "data_acerto",
    "tipo",
    "referencia_tipo",
    "valor",
    "status",
]
ACERTO_STATUS_OPTIONS = ["pendente", "pago", "cancelado"]
ACERTO_TIPO_OPTIONS = ["receita", "despesa"]

AUDIT_COLUMNS = [
    "created_at",
    "table_name",
    "action",
    "record_id",
    "user_id",
]

COLUMN_LABELS = {
    "codigo": "Código",
    "data_entrada": "Data",
    "data_inicio": "Data Início",
    "tipo_material": "Tipo Material",
    "tipo_beneficiamento": "Tipo",
    "nota_fiscal": "Nota Fiscal",
    "peso_bruto_kg": "Peso Bruto (kg)",
    "peso_liquido_kg": "Peso Líquido (kg)",
    "peso_entrada_kg": "Peso Entrada (kg)",
    "peso_saida_kg": "Peso Saída (kg)",
    "peso_kg": "Peso (kg)",
    "perda_real_pct": "Perda Real (%)",
    "perda_cobrada_pct": "Perda Cobrada (%)",
    "lucro_perda_valor": "Lucro na Perda (R$)",
    "valor_unitario": "Valor Unitário",
    "valor_total": "Valor Total",
    "custo_unitario_total": "Custo Unitário (R$)",
    "teor_cobre": "Teor Cobre (%)",
    "status": "Status",
    "created_at": "Criado em",
    "table_name": "Tabela",
    "action": "Ação",
    "record_id": "Registro",
    "user_id": "Usuário",
    "data_acerto": "Data",
    "tipo": "Tipo",
    "referencia_tipo": "Referência",
    "valor": "Valor (R$)",
}
