from __future__ import annotations

import json
import pathlib
import sys
from typing import Dict, List, Optional

import typer
import structlog
from rich.console import Console
from rich.markup import escape

from .config import load_config, BrdocConfig
from .errors import DigitMismatchError, FormatError, ValidationError
from .validators import DocumentKind, check, clean, format_cnpj, format_cpf

console = Console()
log = structlog.get_logger()
app = typer.Typer(add_completion=False, no_args_is_help=True, help="brdoc — CPF/CNPJ validator")

_FORMATTERS = {
    DocumentKind.cpf: format_cpf,
    DocumentKind.cnpj: format_cnpj,
}


def version_callback(value: bool):
    if value:
        from . import __version__
        console.print(f"brdoc {__version__}")
        raise typer.Exit()


def _error_code(err: Optional[ValidationError]) -> Optional[str]:
    if isinstance(err, DigitMismatchError):
        return "digit"
    if isinstance(err, FormatError):
        return "format"
    return None


@app.callback()
def common(
    ctx: typer.Context,
    config: Optional[pathlib.Path] = typer.Option(None, "--config", help="Path to .brdoc.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logs"),
    version: Optional[bool] = typer.Option(None, "--version", callback=version_callback, is_eager=True),
):
    """Global options (config, verbosity)."""
    structlog.configure(
        processors=[structlog.processors.JSONRenderer()],
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )
    cfg = load_config(config) if config else BrdocConfig()
    ctx.obj = {"config": cfg, "verbose": verbose}
    if verbose:
        log.info("verbose_enabled")
        log.info("config_loaded", path=str(config) if config else None, **cfg.model_dump())


@app.command("check")
def check_cmd(
    ctx: typer.Context,
    kind: DocumentKind = typer.Argument(..., help="cpf or cnpj", case_sensitive=False),
    values: List[str] = typer.Argument(..., help="Document numbers, punctuation allowed"),
    strict: Optional[bool] = typer.Option(
        None, "--strict/--no-strict", help="Require canonical punctuation (overrides config)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit a JSON array instead of text"),
):
    """Validate one or more document numbers. Exits 1 if any is invalid."""
    obj = ctx.obj
    cfg: BrdocConfig = obj["config"]
    if strict is None:
        strict = cfg.validation.strict_format

    rows: List[Dict[str, object]] = []
    for value in values:
        err: Optional[ValidationError] = None
        try:
            check(value, kind, strict=strict)
        except ValidationError as e:
            err = e
        rows.append({"value": value, "kind": kind.value, "valid": err is None, "error": _error_code(err)})
        if obj["verbose"]:
            log.info("document_checked", kind=kind.value, valid=err is None, error=_error_code(err))

    if as_json or cfg.output.format == "json":
        typer.echo(json.dumps(rows))
    else:
        for row in rows:
            if row["valid"]:
                console.print(f"{escape(row['value'])}  [green]valid[/green]")
            else:
                console.print(f"{escape(row['value'])}  [red]invalid {row['error']}[/red]")

    if not all(row["valid"] for row in rows):
        raise typer.Exit(code=1)


@app.command("clean")
def clean_cmd(value: str = typer.Argument(..., help="Raw document number")):
    """Print only the digits of VALUE."""
    typer.echo(clean(value))


@app.command("format")
def format_cmd(
    kind: DocumentKind = typer.Argument(..., help="cpf or cnpj", case_sensitive=False),
    value: str = typer.Argument(..., help="Document number, punctuation allowed"),
):
    """Print VALUE in its canonical punctuated form (check digits not verified)."""
    try:
        typer.echo(_FORMATTERS[kind](value))
    except FormatError:
        console.print(f"[red]invalid format:[/red] {escape(value)}")
        raise typer.Exit(code=2)
