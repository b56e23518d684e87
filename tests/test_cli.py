"""Tests for the click command line."""

from __future__ import annotations

import httpx
import pytest
from click.testing import CliRunner

from habitboard import cli
from habitboard.infra.remote import RestClient


@pytest.fixture
def cli_context(test_config, session_factory, now):
    test_config.now = lambda: now
    return cli.CliContext(config=test_config, session_factory=session_factory)


@pytest.fixture
def seeded(cli_context, habit_factory, expense_factory):
    cli_context.cache.save_habits([habit_factory("Leer"), habit_factory("Correr", completed=False)])
    cli_context.cache.save_expenses([expense_factory("Comida", 30)])
    return cli_context


@pytest.fixture
def invoke(cli_context):
    runner = CliRunner()

    def _invoke(*args: str):
        return runner.invoke(cli.main, list(args), obj=cli_context)

    return _invoke


def test_stats_prints_snapshot(seeded, invoke, session_user):
    result = invoke("stats", "--user", str(session_user.id), "--period", "month")

    assert result.exit_code == 0, result.output
    assert "Este mes (desde 2026-10-01)" in result.output
    assert "Hábitos completados: 1/2 (50%)" in result.output
    assert "Racha actual: 1 días" in result.output
    assert "Mejor día: Domingo" in result.output
    assert "Gasto total: €30 (cambio: Sin datos)" in result.output
    assert "Comida: €30 (100.0%)" in result.output


def test_stats_rejects_unknown_period(invoke, session_user):
    result = invoke("stats", "--user", str(session_user.id), "--period", "decade")

    assert result.exit_code == 2


def test_export_writes_combined_file(seeded, invoke, session_user, tmp_path):
    out = tmp_path / "exports"

    result = invoke("export", "--user", str(session_user.id), "--out", str(out))

    assert result.exit_code == 0, result.output
    path = out / "datos_completos_2026-10-18.csv"
    assert path.exists()
    assert path.read_text(encoding="utf-8").startswith("## HÁBITOS\n")


def test_export_single_kind(seeded, invoke, session_user, tmp_path):
    result = invoke("export", "--user", str(session_user.id), "--kind", "expenses", "--out", str(tmp_path))

    assert result.exit_code == 0, result.output
    assert (tmp_path / "gastos_2026-10-18.csv").exists()


def test_chart_writes_png(seeded, invoke, session_user, tmp_path):
    out = tmp_path / "week.png"

    result = invoke("chart", "--user", str(session_user.id), "--kind", "habits", "--out", str(out))

    assert result.exit_code == 0, result.output
    assert out.exists()


def test_token_without_backend_config_is_usage_error(invoke, cli_context, session_user):
    cli_context.config.SUPABASE_URL = ""

    result = invoke("stats", "--user", str(session_user.id), "--token", "abc")

    assert result.exit_code == 2
    assert "HABITBOARD_SUPABASE_URL" in result.output


@pytest.fixture
def remote_cli(monkeypatch, cli_context, backend):
    cli_context.config.SUPABASE_URL = "https://project.supabase.co"
    cli_context.config.SUPABASE_ANON_KEY = "key"

    class MockedClient(RestClient):
        @classmethod
        def from_config(cls, config, **kwargs):
            return RestClient.from_config(config, transport=httpx.MockTransport(backend))

    monkeypatch.setattr(cli, "RestClient", MockedClient)
    return backend


def test_token_refreshes_from_backend(remote_cli, invoke, cli_context, session_user, habit_row, expense_row):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/habits"):
            return httpx.Response(200, json=[habit_row(completed=True, created_at="2026-10-18T08:00:00Z")])
        return httpx.Response(200, json=[expense_row(amount=99)])

    remote_cli.handler = handler

    result = invoke("stats", "--user", str(session_user.id), "--token", "abc")

    assert result.exit_code == 0, result.output
    assert "Gasto total: €99" in result.output
    assert remote_cli.last.headers["Authorization"] == "Bearer abc"
    assert len(cli_context.cache.fetch_expenses(session_user.id)) == 1
    assert cli_context.config.WIDGET_PATH.exists()


def test_token_falls_back_to_cache_when_offline(remote_cli, seeded, invoke, session_user):
    remote_cli.fail()

    result = invoke("stats", "--user", str(session_user.id), "--token", "abc")

    assert result.exit_code == 0, result.output
    assert "sin conexión" in result.output
    assert "Gasto total: €30" in result.output


def test_backend_error_without_cache_fails(remote_cli, invoke, session_user):
    remote_cli.respond_text("boom", 503)

    result = invoke("stats", "--user", str(session_user.id), "--token", "abc")

    assert result.exit_code == 1
    assert "Error 503: boom" in result.output
