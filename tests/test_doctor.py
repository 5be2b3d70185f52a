"""Tests for the `doctor` sub-commands."""

import pytest
from typer.testing import CliRunner

import cli.doctor as doctor
from core import config
from core.config import _parse_env_lines
from core.errors import TransportError

runner = CliRunner()


class _FakeHttpTransport:
    response: dict = {"taxonomies": [{"name": "categories"}, {"name": "areas"}]}
    error: Exception | None = None
    queries: list = []

    def __init__(self, settings):
        self.settings = settings

    async def execute(self, query):
        _FakeHttpTransport.queries.append(query)
        if _FakeHttpTransport.error is not None:
            raise _FakeHttpTransport.error
        return _FakeHttpTransport.response


@pytest.fixture
def fake_http(monkeypatch, settings):
    _FakeHttpTransport.error = None
    _FakeHttpTransport.queries = []
    monkeypatch.setattr(doctor, "AppSettings", lambda: settings)
    monkeypatch.setattr(doctor, "HttpGraphQLTransport", _FakeHttpTransport)
    return _FakeHttpTransport


def test_run_reports_connectivity(fake_http):
    result = runner.invoke(doctor.app, ["run"])

    assert result.exit_code == 0, result.output
    assert "2 taxonomies" in result.stdout
    assert "Configured" in result.stdout
    assert fake_http.queries == [doctor.PING_QUERY]


def test_run_fails_when_api_unreachable(fake_http):
    fake_http.error = TransportError("HTTP request failed with status code: 401", status_code=401)

    result = runner.invoke(doctor.app, ["run"])

    assert result.exit_code == 1
    assert "FAIL" in result.stdout


def test_setup_writes_user_env(monkeypatch, tmp_path):
    env_path = tmp_path / "gbgco" / ".env"
    monkeypatch.setattr(config, "get_user_env_file", lambda: env_path)

    result = runner.invoke(doctor.app, ["setup"], input="\nmy-key\nEN\n")

    assert result.exit_code == 0, result.output
    assert _parse_env_lines(env_path.read_text(encoding="utf-8")) == {
        "GBGCO_API_URL": config.DEFAULT_API_URL,
        "GBGCO_SUBSCRIPTION_KEY": "my-key",
        "GBGCO_DEFAULT_LANGUAGE": "en",
    }


def test_setup_rejects_unknown_language(monkeypatch, tmp_path):
    env_path = tmp_path / ".env"
    monkeypatch.setattr(config, "get_user_env_file", lambda: env_path)

    result = runner.invoke(doctor.app, ["setup"], input="\nmy-key\nfr\n")

    assert result.exit_code != 0
    assert not env_path.exists()
