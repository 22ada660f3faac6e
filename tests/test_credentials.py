"""Unit tests for credential resolution."""

import logging

import pytest

from project_notifier.config.credentials import resolve_credential, resolve_credentials
from project_notifier.config.models import AppConfig
from project_notifier.domain.models import Credentials

PRIMARY_CONFIG = {"email": {"user": "primary@x.com", "pass": "primary-pass", "admin": "admin@x.com"}}
LEGACY_CONFIG = {"gmail": {"email": "legacy@x.com", "password": "legacy-pass", "admin": "old-admin@x.com"}}


class TestPrecedence:
    """explicit > environment > primary namespace > legacy namespace > empty."""

    def test_explicit_wins_over_everything(self):
        value = resolve_credential(
            "sender_user",
            explicit={"sender_user": "explicit@x.com"},
            environ={"EMAIL_USER": "env@x.com"},
            config={**PRIMARY_CONFIG, **LEGACY_CONFIG},
        )
        assert value == "explicit@x.com"

    def test_environment_wins_over_config(self):
        value = resolve_credential(
            "sender_user",
            environ={"EMAIL_USER": "env@x.com"},
            config={**PRIMARY_CONFIG, **LEGACY_CONFIG},
        )
        assert value == "env@x.com"

    def test_primary_namespace_wins_over_legacy(self):
        value = resolve_credential(
            "sender_user", environ={}, config={**PRIMARY_CONFIG, **LEGACY_CONFIG}
        )
        assert value == "primary@x.com"

    def test_legacy_namespace_used_last(self):
        assert resolve_credential("sender_pass", environ={}, config=LEGACY_CONFIG) == "legacy-pass"

    def test_empty_when_nothing_provides_it(self):
        assert resolve_credential("admin_recipient", environ={}, config={}) == ""

    def test_empty_values_do_not_shadow_later_sources(self):
        value = resolve_credential(
            "sender_user",
            explicit={"sender_user": ""},
            environ={"EMAIL_USER": "   "},
            config={"email": {"user": ""}, **LEGACY_CONFIG},
        )
        assert value == "legacy@x.com"

    @pytest.mark.parametrize(
        "name,env_var",
        [
            ("sender_user", "EMAIL_USER"),
            ("sender_pass", "EMAIL_PASS"),
            ("admin_recipient", "ADMIN_EMAIL"),
        ],
    )
    def test_environment_variable_names(self, name, env_var):
        assert resolve_credential(name, environ={env_var: "from-env"}, config={}) == "from-env"

    def test_reads_process_environment_by_default(self, clean_env, monkeypatch):
        monkeypatch.setenv("EMAIL_USER", "process@x.com")
        assert resolve_credential("sender_user", config={}) == "process@x.com"


class TestResolveCredentials:
    def test_resolves_all_three(self):
        creds = resolve_credentials(environ={}, config=PRIMARY_CONFIG)

        assert creds == Credentials(
            sender_user="primary@x.com",
            sender_pass="primary-pass",
            admin_recipient="admin@x.com",
        )

    def test_missing_credentials_never_raise(self):
        creds = resolve_credentials(environ={}, config=None)

        assert creds.sender_user == ""
        assert creds.sender_pass == ""
        assert creds.admin_recipient == ""
        assert creds.missing() == ["sender_user", "sender_pass", "admin_recipient"]

    def test_warns_once_when_incomplete(self, caplog):
        with caplog.at_level(logging.WARNING):
            resolve_credentials(environ={"EMAIL_USER": "u@x.com"}, config={})

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert warnings[0].event == "credentials.unresolved"
        assert warnings[0].missing == ["sender_pass", "admin_recipient"]

    def test_no_warning_when_complete(self, caplog):
        with caplog.at_level(logging.INFO):
            resolve_credentials(environ={}, config=PRIMARY_CONFIG)

        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]
        assert any(getattr(r, "event", None) == "credentials.resolved" for r in caplog.records)

    def test_works_with_app_config_namespaces(self):
        app_config = AppConfig.model_validate(
            {"email": {"user": "cfg@x.com", "pass": "p"}, "gmail": {"admin": "legacy-admin@x.com"}}
        )

        creds = resolve_credentials(environ={}, config=app_config.credential_namespaces())

        assert creds.sender_user == "cfg@x.com"
        assert creds.sender_pass == "p"
        assert creds.admin_recipient == "legacy-admin@x.com"

    def test_password_not_in_repr(self):
        creds = Credentials(sender_user="u@x.com", sender_pass="secret", admin_recipient="a@x.com")
        assert "secret" not in repr(creds)
