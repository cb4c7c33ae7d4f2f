"""Streamlit app entrypoint for the IBRAC management dashboard."""

from __future__ import annotations

from typing import Callable, Dict

import streamlit as st
from supabase import Client

from ibrac_dashboard.components.navbar import render_navbar
from ibrac_dashboard.config import APP_TITLE, ASSETS_DIR, LOG_JSON, LOG_LEVEL, SUPABASE_KEY, SUPABASE_URL
from ibrac_dashboard.services import auth_service
from ibrac_dashboard.services.access_control import AccessDecision, check_access, visible_routes
from ibrac_dashboard.services.data_source import create_supabase_client
from ibrac_dashboard.services.errors import AuthenticationError, ConfigurationError, DataSourceError
from ibrac_dashboard.utils.logging_config import get_logger, setup_logging
from ibrac_dashboard.views import auditoria, beneficiamento, dashboard, entrada, estoque, financeiro, simulador
from ibrac_dashboard.views.common import ViewContext, discard_inactive_queries

st.set_page_config(page_title=APP_TITLE, layout="wide")

ViewRenderer = Callable[[ViewContext], None]

ROUTES: Dict[str, tuple[str, ViewRenderer]] = {
    "/": ("Painel", dashboard.render),
    "/estoque": ("Estoque", estoque.render),
    "/entrada": ("Entradas", entrada.render),
    "/beneficiamento": ("Beneficiamento", beneficiamento.render),
    "/financeiro": ("Financeiro", financeiro.render),
    "/simulador": ("Simulador", simulador.render),
    "/auditoria": ("Auditoria", auditoria.render),
}

logger = get_logger(__name__)


def load_css() -> None:
    """Load app-level CSS styling from the assets directory."""
    css_path = ASSETS_DIR / "styles.css"
    if css_path.exists():
        with css_path.open("r", encoding="utf-8") as css_file:
            st.markdown(f"<style>{css_file.read()}</style>", unsafe_allow_html=True)


def init_session_state() -> None:
    """Initialize required session-state variables."""
    st.session_state.setdefault("user", None)
    st.session_state.setdefault("active_route", "/")


@st.cache_resource(show_spinner=False)
def get_client(url: str, key: str) -> Client:
    """One Supabase client per server process."""
    return create_supabase_client(url, key)


def render_login(client: Client) -> None:
    """Render the sign-in form and store the session user on success."""
    st.title(APP_TITLE)
    with st.form("login_form"):
        email = st.text_input("E-mail")
        password = st.text_input("Senha", type="password")
        submitted = st.form_submit_button("Entrar", type="primary")

    if not submitted:
        return
    try:
        st.session_state["user"] = auth_service.sign_in(client, email.strip(), password)
    except AuthenticationError as exc:
        st.error(f"Falha no login: {exc}")
        return
    except DataSourceError as exc:
        st.error(f"Erro ao carregar perfil: {exc.detail}")
        return
    st.rerun()


def render_pending_role(user: auth_service.SessionUser) -> None:
    st.warning(
        "Sua conta ainda não possui permissões atribuídas. "
        "Entre em contato com um administrador para liberar seu acesso."
    )
    st.caption(f"E-mail: {user.email}")


def render_sidebar(client: Client, user: auth_service.SessionUser) -> str:
    """Render navigation limited to the user's routes and return the chosen one."""
    routes = visible_routes(user.role, ROUTES.keys())
    if st.session_state["active_route"] not in routes:
        st.session_state["active_route"] = routes[0] if routes else "/"

    st.sidebar.markdown(f"## {APP_TITLE}")
    chosen = st.sidebar.radio(
        "Navegação",
        routes,
        index=routes.index(st.session_state["active_route"]) if routes else 0,
        format_func=lambda route: ROUTES[route][0],
        key="navigation",
    )
    if st.sidebar.button("Sair"):
        auth_service.sign_out(client)
        st.session_state.clear()
        st.rerun()
    return chosen or "/"


def main() -> None:
    """Render and run the IBRAC dashboard."""
    setup_logging(LOG_LEVEL, json_output=LOG_JSON)
    load_css()
    init_session_state()

    try:
        client = get_client(SUPABASE_URL, SUPABASE_KEY)
    except ConfigurationError as exc:
        st.error(str(exc))
        st.stop()

    user = st.session_state["user"]
    if user is None:
        render_login(client)
        return

    render_navbar(user.email, user.role.value if user.role else None)

    decision = check_access(user.id, user.role, "/")
    if decision == AccessDecision.PENDING_ROLE:
        render_pending_role(user)
        return

    route = render_sidebar(client, user)
    if route != st.session_state["active_route"]:
        logger.info("view_changed", user_id=user.id, route=route)
        st.session_state["active_route"] = route

    label, renderer = ROUTES[route]
    view_key = route.strip("/") or "dashboard"
    discard_inactive_queries(view_key)

    if check_access(user.id, user.role, route) != AccessDecision.ALLOWED:
        st.error("Você não possui permissão para acessar esta página.")
        st.caption(f"Seu perfil: {user.role.value if user.role else '-'}")
        return

    try:
        renderer(ViewContext(client=client, user=user))
    except DataSourceError as exc:
        logger.error("view_failed", route=route, error=str(exc))
        st.error(f"Erro ao carregar {label}: {exc.detail}")


if __name__ == "__main__":
    main()
