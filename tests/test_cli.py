"""Tests for the `billomat` CLI."""

from __future__ import annotations

import json

import pytest
from dotenv import dotenv_values
from typer.testing import CliRunner

from billomat_client.adapters.api_client import get_billomat_api_client
from billomat_client.cli import main as cli_main

runner = CliRunner()


@pytest.fixture
def fake_api(config, billomat, monkeypatch):
    monkeypatch.setattr(
        cli_main,
        "_make_api",
        lambda: get_billomat_api_client(config, client=billomat.client(config)),
    )
    return billomat


def _stdout_json(result):
    return json.loads(result.stdout)


def test_list(fake_api):
    fake_api.respond({"clients": {"client": {"id": 1, "name": "Acme"}}})

    result = runner.invoke(cli_main.app, ["list", "clients", "-q", "name=Acme"])

    assert result.exit_code == 0, result.output
    assert _stdout_json(result) == [{"id": 1, "name": "Acme"}]
    assert fake_api.last.url.params["name"] == "Acme"


def test_get(fake_api):
    fake_api.respond({"invoice": {"id": 42}})

    result = runner.invoke(cli_main.app, ["get", "invoices", "42"])

    assert result.exit_code == 0, result.output
    assert _stdout_json(result) == {"id": 42}
    assert fake_api.last.url.path == "/api/invoices/42"


def test_raw_with_payload(fake_api):
    fake_api.respond({"ok": True})

    result = runner.invoke(
        cli_main.app,
        ["raw", "invoices", "put", "42/complete", "--payload", '{"complete": {}}'],
    )

    assert result.exit_code == 0, result.output
    assert fake_api.last.method == "PUT"
    assert fake_api.last.url.path == "/api/invoices/42/complete"
    assert fake_api.last_json() == {"complete": {}}


def test_raw_rejects_bad_payload(fake_api):
    result = runner.invoke(cli_main.app, ["raw", "invoices", "POST", "--payload", "{nope"])

    assert result.exit_code != 0
    assert fake_api.requests == []


def test_bad_query_pair(fake_api):
    result = runner.invoke(cli_main.app, ["list", "invoices", "-q", "status"])
    assert result.exit_code != 0


def test_unsupported_resource(fake_api):
    result = runner.invoke(cli_main.app, ["list", "unicorns"])

    assert result.exit_code == 1
    assert fake_api.requests == []


def test_http_error_exits_with_one(fake_api):
    fake_api.respond({"errors": {"error": "Unauthorized"}}, status=401)

    result = runner.invoke(cli_main.app, ["get", "invoices", "1"])

    assert result.exit_code == 1


def test_missing_configuration(monkeypatch):
    def fail():
        raise ValueError("BILLOMAT_API_KEY must be set")

    monkeypatch.setattr(cli_main, "_make_api", fail)

    result = runner.invoke(cli_main.app, ["get", "invoices", "1"])

    assert result.exit_code == 1


def test_setup_writes_user_env(tmp_path, monkeypatch):
    env_path = tmp_path / ".env"
    monkeypatch.setattr(
        cli_main,
        "write_user_env_vars",
        lambda values: cli_main_write(values, env_path),
    )

    result = runner.invoke(cli_main.app, ["setup"], input="acme\nkey-123\n\n\n")

    assert result.exit_code == 0, result.output
    assert dict(dotenv_values(env_path)) == {"BILLOMAT_BILLOMAT_ID": "acme", "BILLOMAT_API_KEY": "key-123"}


def cli_main_write(values, env_path):
    from billomat_client.core.config import write_user_env_vars

    return write_user_env_vars(values, env_path=env_path)


class _DoctorSettings:
    effective_base_url = "https://acme.billomat.net"
    api_key = "secret-key"
    app_id = None
    app_secret = None

    def __init__(self, config):
        self._config = config

    def to_client_config(self):
        return self._config


def test_doctor_reports_connectivity(config, billomat, monkeypatch, rate_limit_headers):
    from billomat_client.adapters import api_client as api_client_module
    from billomat_client.cli import doctor

    monkeypatch.setattr(api_client_module, "build_async_client", billomat.client)
    monkeypatch.setattr(doctor, "BillomatSettings", lambda: _DoctorSettings(config))
    billomat.respond({"countries": {"country": [{"code": "DE"}]}}, headers=rate_limit_headers)

    result = runner.invoke(cli_main.app, ["doctor", "run"])

    assert result.exit_code == 0, result.output
    assert billomat.last.url.path == "/api/countries"
    assert billomat.last.url.params["per_page"] == "1"


def test_doctor_fails_on_http_error(config, billomat, monkeypatch):
    from billomat_client.adapters import api_client as api_client_module
    from billomat_client.cli import doctor

    monkeypatch.setattr(api_client_module, "build_async_client", billomat.client)
    monkeypatch.setattr(doctor, "BillomatSettings", lambda: _DoctorSettings(config))
    billomat.respond({}, status=401)

    result = runner.invoke(cli_main.app, ["doctor", "run"])

    assert result.exit_code == 1
