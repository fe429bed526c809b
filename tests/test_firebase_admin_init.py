"""Tests for Firebase credential selection."""

from unittest.mock import MagicMock

import pytest

from recipe_relay.services import firebase_admin_init
from recipe_relay.utils.exceptions import ConfigurationError


@pytest.fixture
def fake_settings(monkeypatch):
    settings = MagicMock(firebase_service_account=None, google_application_credentials=None)
    monkeypatch.setattr(firebase_admin_init, "settings", settings)
    return settings


def test_no_credentials_configured(fake_settings):
    assert firebase_admin_init._load_credentials() is None


def test_invalid_service_account_json(fake_settings):
    fake_settings.firebase_service_account = "{not json"

    with pytest.raises(ConfigurationError, match="FIREBASE_SERVICE_ACCOUNT"):
        firebase_admin_init._load_credentials()


def test_service_account_json_is_parsed(fake_settings, monkeypatch):
    certificate = MagicMock(return_value="cert")
    monkeypatch.setattr(firebase_admin_init.credentials, "Certificate", certificate)
    fake_settings.firebase_service_account = '{"type": "service_account", "project_id": "demo"}'

    assert firebase_admin_init._load_credentials() == "cert"
    certificate.assert_called_once_with({"type": "service_account", "project_id": "demo"})


def test_key_file_path(fake_settings, monkeypatch):
    certificate = MagicMock(return_value="cert")
    monkeypatch.setattr(firebase_admin_init.credentials, "Certificate", certificate)
    fake_settings.google_application_credentials = "/secrets/key.json"

    assert firebase_admin_init._load_credentials() == "cert"
    certificate.assert_called_once_with("/secrets/key.json")
