"""Role-based access control for dashboard routes."""

from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional


class AppRole(str, Enum):
    ADMIN = "admin"
    DONO = "dono"
    OPERACAO = "operacao"
    FINANCEIRO = "financeiro"


class AccessDecision(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    PENDING_ROLE = "pending_role"
    DENIED = "denied"
    ALLOWED = "allowed"


_ALL_ROLES: FrozenSet[AppRole] = frozenset(AppRole)
_OPERATIONAL = frozenset({AppRole.ADMIN, AppRole.OPERACAO})
_FINANCIAL = frozenset({AppRole.ADMIN, AppRole.FINANCEIRO})
_REPORTING = frozenset({AppRole.ADMIN, AppRole.FINANCEIRO, AppRole.DONO})
_ADMIN_ONLY = frozenset({AppRole.ADMIN})

ROUTE_PERMISSIONS: Dict[str, FrozenSet[AppRole]] = {
    "/": _ALL_ROLES,
    "/estoque": _ALL_ROLES,
    "/indicadores": _ALL_ROLES,
    "/entrada": _OPERATIONAL,
    "/beneficiamento": _OPERATIONAL,
    "/saida": _OPERATIONAL,
    "/cadastros": _OPERATIONAL,
    "/financeiro": _FINANCIAL,
    "/simulador": frozenset({AppRole.ADMIN, AppRole.FINANCEIRO, AppRole.OPERACAO}),
    "/relatorios": _REPORTING,
    "/extrato-dono": _REPORTING,
    "/usuarios": _ADMIN_ONLY,
    "/auditoria": _ADMIN_ONLY,
    "/configuracoes": _ADMIN_ONLY,
}


def parse_role(value: object) -> Optional[AppRole]:
    """Map a stored role string to ``AppRole``; unknown values mean no role."""
    try:
        return AppRole(str(value))
    except ValueError:
        return None


def allowed_roles(route: str) -> Optional[FrozenSet[AppRole]]:
    return ROUTE_PERMISSIONS.get(route)


def check_access(
    user_id: Optional[str],
    role: Optional[AppRole],
    route: str,
    required_roles: Optional[Iterable[AppRole]] = None,
) -> AccessDecision:
    """Decide whether a user may open ``route``.

    Explicit ``required_roles`` override the route table. Routes missing from
    the table are open to any user holding a role.
    """
    if not user_id:
        return AccessDecision.UNAUTHENTICATED
    if role is None:
        return AccessDecision.PENDING_ROLE

    roles = frozenset(required_roles) if required_roles is not None else allowed_roles(route)
    if roles is not None and role not in roles:
        return AccessDecision.DENIED
    return AccessDecision.ALLOWED


def visible_routes(role: Optional[AppRole], routes: Iterable[str]) -> list[str]:
    """Filter navigation entries down to the routes ``role`` can open."""
    if role is None:
        return []
    return [route for route in routes if check_access("-", role, route) == AccessDecision.ALLOWED]
