import pytest

from app.infrastructure.external.auth_data import WSFE_URLS, EnvAuthProvider


@pytest.fixture
def wsfe_env(monkeypatch):
    monkeypatch.setenv("WSFE_TOKEN", "tok")
    monkeypatch.setenv("WSFE_SIGN", "sig")
    monkeypatch.setenv("WSFE_CUIT", "20123456789")
    monkeypatch.delenv("WSFE_URL", raising=False)
    monkeypatch.delenv("WSFE_ENVIRONMENT", raising=False)
    return monkeypatch


def test_credential_block(wsfe_env):
    assert EnvAuthProvider().credential_block() == {
        "Auth": {"Token": "tok", "Sign": "sig", "Cuit": 20123456789}
    }


def test_endpoint_defaults_to_homologacion(wsfe_env):
    assert EnvAuthProvider().endpoint_url() == WSFE_URLS["homologacion"]


def test_endpoint_for_produccion(wsfe_env):
    wsfe_env.setenv("WSFE_ENVIRONMENT", "produccion")
    assert EnvAuthProvider().endpoint_url() == "https://servicios1.afip.gov.ar/wsfev1/service.asmx"


def test_explicit_url_wins(wsfe_env):
    wsfe_env.setenv("WSFE_URL", "http://localhost:8080/wsfev1")
    assert EnvAuthProvider().endpoint_url() == "http://localhost:8080/wsfev1"


def test_missing_credentials(wsfe_env):
    wsfe_env.delenv("WSFE_SIGN")
    with pytest.raises(ValueError):
        EnvAuthProvider()


def test_unknown_environment(wsfe_env):
    wsfe_env.setenv("WSFE_ENVIRONMENT", "staging")
    with pytest.raises(ValueError):
        EnvAuthProvider()
