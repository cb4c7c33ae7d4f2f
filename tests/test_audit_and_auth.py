from datetime import date

import pytest

from ibrac_dashboard.services import audit_service, auth_service
from ibrac_dashboard.services.access_control import AppRole
from ibrac_dashboard.services.errors import AuthenticationError


class TestAuditTrail:
    def test_entry_is_json_safe(self):
        entry = audit_service.build_audit_entry(
            "entradas", "INSERT", "r1", "u1", {"codigo": "E-1", "data_entrada": date(2026, 1, 15)}
        )
        assert entry == {
            "table_name": "entradas",
            "action": "INSERT",
            "record_id": "r1",
            "user_id": "u1",
            "record_data": {"codigo": "E-1", "data_entrada": "2026-01-15"},
        }

    def test_append_writes_to_audit_table(self, fake_client):
        audit_service.append_audit_entry(fake_client, "beneficiamentos", "INSERT", "b1", "u1", {"codigo": "B-1"})
        [stored] = fake_client.tables["audit_logs"]
        assert stored["table_name"] == "beneficiamentos"
        assert stored["record_data"] == {"codigo": "B-1"}


class TestSignIn:
    @pytest.fixture
    def client(self, fake_client):
        fake_client.auth.users["ana@ibrac.com.br"] = ("u1", "segredo")
        fake_client.tables["user_roles"] = [{"user_id": "u1", "role": "financeiro"}]
        return fake_client

    def test_sign_in_resolves_role(self, client):
        user = auth_service.sign_in(client, "ana@ibrac.com.br", "segredo")
        assert user == auth_service.SessionUser(id="u1", email="ana@ibrac.com.br", role=AppRole.FINANCEIRO)

    def test_user_without_role(self, client):
        client.tables["user_roles"] = []
        user = auth_service.sign_in(client, "ana@ibrac.com.br", "segredo")
        assert user.role is None

    def test_wrong_password(self, client):
        with pytest.raises(AuthenticationError):
            auth_service.sign_in(client, "ana@ibrac.com.br", "errada")

    def test_blank_credentials(self, client):
        with pytest.raises(AuthenticationError):
            auth_service.sign_in(client, "", "segredo")

    def test_sign_out(self, client):
        auth_service.sign_out(client)
        assert client.auth.signed_out
