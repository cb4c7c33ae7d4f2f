"""Sign-in against Supabase Auth and role lookup."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from supabase import AuthError, Client

from ibrac_dashboard.config import USER_ROLES_TABLE
from ibrac_dashboard.services.access_control import AppRole, parse_role
from ibrac_dashboard.services.data_source import fetch_all
from ibrac_dashboard.services.errors import AuthenticationError
from ibrac_dashboard.utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SessionUser:
    id: str
    email: str
    role: Optional[AppRole] = None


def fetch_user_role(client: Client, user_id: str) -> Optional[AppRole]:
    """Return the role assigned to ``user_id``, or None when none is assigned."""
    rows = fetch_all(client, USER_ROLES_TABLE, "role", {"user_id": user_id})
    return parse_role(rows[0].get("role")) if rows else None


def sign_in(client: Client, email: str, password: str) -> SessionUser:
    """Authenticate with e-mail/password and resolve the user's role."""
    if not email or not password:
        raise AuthenticationError("Informe e-mail e senha.")
    try:
        response = client.auth.sign_in_with_password({"email": email, "password": password})
    except AuthError as exc:
        logger.warning("sign_in_rejected", email=email)
        raise AuthenticationError(str(exc)) from exc

    user = getattr(response, "user", None)
    if user is None:
        raise AuthenticationError("Credenciais inválidas.")

    role = fetch_user_role(client, user.id)
    logger.info("signed_in", user_id=user.id, role=role.value if role else None)
    return SessionUser(id=user.id, email=user.email or email, role=role)


def sign_out(client: Client) -> None:
    client.auth.sign_out()
