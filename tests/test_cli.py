import json
from contextlib import contextmanager

import pytest
from click.testing import CliRunner

from stmtguard import __version__, cli
from stmtguard.executor import ExecutionReport, StatementResult

SCRIPT = "CREATE TABLE t (a int);\nINSERT INTO t VALUES (';');\nSELECT * FROM t"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config(tmp_path):
    path = tmp_path / "cfg.yml"
    path.write_text(
        "default_env: dev\n"
        "environments:\n"
        "  dev:\n"
        "    host: localhost\n"
        "    database: app\n"
        "    user: app\n"
        "    password: pw\n"
    )
    return str(path)


def test_version(runner):
    result = runner.invoke(cli.main, ["version"])
    assert result.exit_code == 0
    assert result.output.strip() == __version__


def test_split_json(runner):
    result = runner.invoke(cli.main, ["split", "--json", "-"], input=SCRIPT)
    assert result.exit_code == 0
    assert json.loads(result.output) == [
        "CREATE TABLE t (a int);",
        "INSERT INTO t VALUES (';');",
        "SELECT * FROM t;",
    ]


def test_split_lists_types(runner):
    result = runner.invoke(cli.main, ["split", "-"], input=SCRIPT)
    assert result.exit_code == 0
    assert "-- [1] CREATE" in result.output
    assert "-- [3] SELECT" in result.output


def test_split_warns_on_open_literal(runner):
    result = runner.invoke(cli.main, ["split", "-"], input="SELECT 'oops")
    assert result.exit_code == 0
    assert "unterminated single-quoted literal" in result.output


def test_check_passes(runner):
    result = runner.invoke(cli.main, ["check", "-"], input=SCRIPT)
    assert result.exit_code == 0
    assert "3 statement(s)" in result.output


def test_check_rejects_destructive(runner):
    result = runner.invoke(cli.main, ["check", "-"], input="SELECT 1; drop table users;")
    assert result.exit_code == 1
    assert "drop table users;" in result.output


def test_check_empty_script(runner):
    result = runner.invoke(cli.main, ["check", "-"], input=" ;; ")
    assert result.exit_code == 1


def test_execute_dry_run(runner, config, monkeypatch):
    def fail(_env):
        raise AssertionError("must not connect")

    monkeypatch.setattr(cli, "connection", fail)
    result = runner.invoke(
        cli.main, ["-c", config, "execute", "--dry-run", "-"], input=SCRIPT
    )
    assert result.exit_code == 0
    assert "DRY" in result.output


def test_execute_guard_blocks_before_connecting(runner, config, monkeypatch):
    def fail(_env):
        raise AssertionError("must not connect")

    monkeypatch.setattr(cli, "connection", fail)
    result = runner.invoke(
        cli.main,
        ["-c", config, "execute", "--auto-approve", "-"],
        input="SELECT 1; TRUNCATE t;",
    )
    assert result.exit_code == 1
    assert "TRUNCATE t;" in result.output


def test_execute_runs_batch(runner, config, monkeypatch):
    seen = {}

    @contextmanager
    def fake_connection(env):
        seen["env"] = env.name
        yield "conn"

    def fake_execute(conn, stmts):
        seen["stmts"] = stmts
        return ExecutionReport(
            statements=stmts,
            results=[
                StatementResult(
                    statement=s,
                    command="SELECT",
                    row_count=1,
                    duration_ms=0.5,
                    fields=[],
                    rows=[(1,)],
                )
                for s in stmts
            ],
        )

    monkeypatch.setattr(cli, "connection", fake_connection)
    monkeypatch.setattr(cli, "execute_statements", fake_execute)
    result = runner.invoke(
        cli.main,
        ["-c", config, "execute", "--auto-approve", "--json", "-"],
        input="SELECT 1; SELECT 2",
    )
    assert result.exit_code == 0, result.output
    assert seen == {"env": "dev", "stmts": ["SELECT 1;", "SELECT 2;"]}
    assert '"command": "SELECT"' in result.output


def test_execute_confirmation_declined(runner, config, tmp_path, monkeypatch):
    def fail(_env):
        raise AssertionError("must not connect")

    script = tmp_path / "batch.sql"
    script.write_text("SELECT 1;")
    monkeypatch.setattr(cli, "connection", fail)
    result = runner.invoke(
        cli.main, ["-c", config, "execute", str(script)], input="n\n"
    )
    assert result.exit_code == 1
    assert "Aborted" in result.output


def test_bad_config(runner, tmp_path):
    result = runner.invoke(
        cli.main,
        ["-c", str(tmp_path / "missing.yml"), "execute", "-"],
        input="SELECT 1;",
    )
    assert result.exit_code == 1
    assert "Config error" in result.output
