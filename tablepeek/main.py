from __future__ import annotations

import sys
from typing import List, Optional

import typer

from tablepeek.config import Settings, get_settings
from tablepeek.domain.errors import QueryError
from tablepeek.infrastructure.db_factory import connection_target, open_connection
from tablepeek.materializer import list_tables, materialize
from tablepeek.picker import run_picker
from tablepeek.serialization import serialize
from tablepeek.utils.logging import configure_logging, get_logger

log = get_logger(__name__)

app = typer.Typer(help="Dump MySQL tables as JSON and browse the table list.")


def _fail(exc: QueryError) -> typer.Exit:
    log.error(f"Query failed: {exc}", extra={"statement": exc.statement})
    return typer.Exit(code=1)


@app.callback()
def cli(
    ctx: typer.Context,
    user: Optional[str] = typer.Option(
        None, "--user", help="Database account for sign-in [default: root]."
    ),
    password: Optional[str] = typer.Option(
        None, "--password", help="Password for the sign-in account [default: empty]."
    ),
    host: Optional[str] = typer.Option(
        None, "--host", help="Hostname of the database server [default: localhost]."
    ),
    database: Optional[str] = typer.Option(
        None, "--database", help="The database to access [default: empty]."
    ),
    port: Optional[int] = typer.Option(
        None, "--port", help="Port the database server listens on [default: 3306]."
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level for stderr diagnostics [default: INFO]."
    ),
    json_logs: Optional[bool] = typer.Option(
        None, "--json-logs/--plain-logs", help="Emit stderr diagnostics as JSON."
    ),
) -> None:
    """
    Connection flags override DB_* environment variables and `.env` values.
    """
    settings = get_settings().with_overrides(
        db_user=user,
        db_password=password,
        db_host=host,
        db_name=database,
        db_port=port,
        log_level=log_level,
        log_json=json_logs,
    )
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    ctx.obj = settings


@app.command()
def info(ctx: typer.Context) -> None:
    """
    Show effective configuration values.
    """
    settings: Settings = ctx.obj
    typer.echo(
        f"DB={connection_target(settings, mask_password=True)} | "
        f"tables={','.join(settings.dump_tables)}"
    )


@app.command()
def tables(ctx: typer.Context) -> None:
    """
    List the tables of the configured database, one per line.
    """
    settings: Settings = ctx.obj
    try:
        with open_connection(settings) as conn:
            names = list_tables(conn)
    except QueryError as exc:
        raise _fail(exc) from exc
    for name in names:
        typer.echo(name)


@app.command()
def run(
    ctx: typer.Context,
    table: Optional[List[str]] = typer.Option(
        None,
        "--table",
        "-t",
        help="Table to dump as JSON; repeat for several (default: ProgrammingLanguages, Notes).",
    ),
    interactive: Optional[bool] = typer.Option(
        None,
        "--interactive/--no-interactive",
        help="Show the table picker afterwards (default: only when stdin is a terminal).",
    ),
) -> None:
    """
    Dump each selected table as a JSON array, then pick a table to look at.
    """
    settings: Settings = ctx.obj
    dump_tables = table or settings.dump_tables
    if interactive is None:
        interactive = sys.stdin.isatty()

    log.info(
        f"Connecting to {connection_target(settings, mask_password=True)}",
        extra={"tables": dump_tables},
    )
    try:
        with open_connection(settings) as conn:
            names = list_tables(conn)
            for name in dump_tables:
                payload = serialize(materialize(conn, name, database=settings.db_name))
                typer.echo(payload.decode("utf-8"))
    except QueryError as exc:
        raise _fail(exc) from exc

    if not interactive:
        return
    choice = run_picker(names, title=f"Tables in the {settings.db_name} database:")
    log.debug("Picker finished", extra={"choice": choice})


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
