"""CLI helpers, session storage and auth commands."""

import json

import pytest
from typer.testing import CliRunner

from adapters.cli import main as cli
from adapters.cli import session as session_mod


@pytest.fixture
def session_dir(tmp_path, monkeypatch):
    directory = tmp_path / "session"
    monkeypatch.setattr(session_mod, "_SESSION_DIR", directory)
    monkeypatch.setattr(session_mod, "_SESSION_FILE", directory / "session.json")
    return directory


@pytest.fixture
def cli_env(monkeypatch, db_path, session_dir):
    monkeypatch.setenv("DB_PATH", db_path)
    monkeypatch.setenv("JWT_SECRET", "test-secret")
    monkeypatch.setattr("dotenv.load_dotenv", lambda *a, **k: False)
    return monkeypatch


@pytest.mark.parametrize("text,expected", [
    ("insomnia, fatigue", ["insomnia", "fatigue"]),
    ("失眠、乏力", ["失眠", "乏力"]),
    (" gout ,, ", ["gout"]),
])
def test_tags_to_json(text, expected):
    assert json.loads(cli.tags_to_json(text)) == expected


def test_tags_to_json_empty():
    assert cli.tags_to_json("  ") == ""


@pytest.mark.parametrize("text,expected", [
    ("low", -1), ("Normal", 0), (" HIGH ", 1), ("", None), ("very high", None),
])
def test_parse_level(text, expected):
    assert cli.parse_level(text) == expected


def test_session_round_trip(session_dir):
    assert session_mod.load_session() is None
    session_mod.save_session(session_mod.Session(user_id=4, access_token="tok", nickname="amy"))
    assert session_mod.load_session() == session_mod.Session(4, "tok", "amy")
    session_mod.clear_session()
    assert session_mod.load_session() is None


def test_corrupt_session_is_ignored(session_dir):
    session_dir.mkdir()
    (session_dir / "session.json").write_text("{not json", encoding="utf-8")
    assert session_mod.load_session() is None


def _answer(monkeypatch, *answers):
    replies = iter(answers)
    monkeypatch.setattr(cli.Prompt, "ask", lambda *a, **k: next(replies))


def test_register_then_whoami(cli_env):
    _answer(cli_env, "carol", "secret1")
    runner = CliRunner()
    result = runner.invoke(cli.app, ["register"])
    assert result.exit_code == 0, result.output
    assert session_mod.load_session().nickname == "carol"

    result = runner.invoke(cli.app, ["whoami"])
    assert "carol" in result.output


def test_login_failure(cli_env):
    _answer(cli_env, "nobody", "secret1")
    result = CliRunner().invoke(cli.app, ["login"])
    assert result.exit_code == 1
    assert "Login failed" in result.output
    assert session_mod.load_session() is None


def test_recommend_requires_login(cli_env):
    result = CliRunner().invoke(cli.app, ["recommend"])
    assert result.exit_code == 1
    assert "Not logged in" in result.output


def test_recommend_without_llm_settings(cli_env):
    cli_env.delenv("LLM_API_URL", raising=False)
    cli_env.delenv("LLM_API_KEY", raising=False)
    session_mod.save_session(session_mod.Session(user_id=1, access_token="tok", nickname="carol"))
    _answer(cli_env, "insomnia", "male", "45", "high", "normal", "")
    result = CliRunner().invoke(cli.app, ["recommend"])
    assert result.exit_code == 1
    assert "Configuration error" in result.output
