#!/usr/bin/env python3
"""
stmtguard – split SQL scripts into statements, refuse destructive batches
and run the rest against PostgreSQL.

• ``split``    list the statements a script breaks into
• ``check``    split + destructive‑keyword guard, no database needed
• ``execute``  check, confirm, then run every statement on one connection
"""
from __future__ import annotations

import json
import logging
import pathlib
import sys

import click

from stmtguard import __version__
from stmtguard.batch import prepare_batch
from stmtguard.config import ConfigError, Environment, load
from stmtguard.driver import connection
from stmtguard.executor import execute_statements
from stmtguard.guard import BatchError, GuardViolation
from stmtguard.segment import segment
from stmtguard.segment.states import describe
from stmtguard.utils import statement_type


def _load_env(ctx, _param, value) -> Environment | None:
    if ctx.resilient_parsing:
        return None
    try:
        return load(ctx.obj["config_path"], value)
    except ConfigError as exc:
        click.echo(f"Config error: {exc}", err=True)
        sys.exit(1)


def _read_script(script) -> list[str]:
    result = segment(script.read())
    if result.unterminated:
        click.echo(
            f"Warning: script ends inside an unterminated {describe(result.open_state)}",
            err=True,
        )
    return result.statements


def _prepare(statements: list[str], allow_destructive: bool) -> list[str]:
    try:
        return prepare_batch(statements, allow_destructive=allow_destructive)
    except GuardViolation as exc:
        click.echo(f"✖  {exc}  (matched {exc.keyword!r})", err=True)
        sys.exit(1)
    except BatchError as exc:
        click.echo(f"✖  {exc}", err=True)
        sys.exit(1)


@click.group()
@click.option(
    "-c", "--config", "config_path", type=click.Path(), help="env config YAML"
)
@click.option("-v", "--verbose", is_flag=True, help="debug logging")
@click.pass_context
def main(ctx, config_path, verbose):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"config_path": pathlib.Path(config_path) if config_path else None}


@main.command()
def version():
    click.echo(__version__)


@main.command("split")
@click.argument("script", type=click.File("r", encoding="utf-8"))
@click.option("--json", "as_json", is_flag=True, help="print a JSON list")
def split_cmd(script, as_json):
    stmts = _read_script(script)
    if as_json:
        click.echo(json.dumps(stmts, indent=2, ensure_ascii=False))
        return
    for n, stmt in enumerate(stmts, 1):
        click.echo(f"-- [{n}] {statement_type(stmt)}")
        click.echo(stmt)


@main.command("check")
@click.argument("script", type=click.File("r", encoding="utf-8"))
def check_cmd(script):
    stmts = _prepare(_read_script(script), allow_destructive=False)
    click.echo(f"✅  {len(stmts)} statement(s) passed the guard.")


@main.command("execute")
@click.argument("script", type=click.File("r", encoding="utf-8"))
@click.option("-e", "--env", callback=_load_env, expose_value=True)
@click.option("--dry-run", is_flag=True)
@click.option("--allow-destructive", is_flag=True)
@click.option("--auto-approve", is_flag=True)
@click.option("--json", "as_json", is_flag=True, help="print the report as JSON")
def execute_cmd(script, env, dry_run, allow_destructive, auto_approve, as_json):
    stmts = _prepare(
        _read_script(script),
        allow_destructive=allow_destructive or env.allow_destructive,
    )

    for stmt in stmts:
        click.echo(stmt)
    if dry_run:
        click.echo("\n-- DRY‑RUN complete (no changes executed)")
        return

    if not auto_approve:
        click.confirm(
            f"\nExecute {len(stmts)} statement(s) on {env.name!r}?", abort=True
        )

    with connection(env) as conn:
        report = execute_statements(conn, stmts)

    if as_json:
        click.echo(json.dumps(report.as_dict(), indent=2, default=str))
        return

    for res in report.results:
        click.echo(
            f"{res.command or '?':<10} rows={res.row_count:<6} {res.duration_ms:8.1f} ms"
        )
        if res.text:
            click.echo(f"  NOTICE: {res.text}")
    click.echo(f"✅  Executed {len(report.results)} statement(s) in {report.execution_time_ms:.1f} ms.")


if __name__ == "__main__":
    main()
