"""
rulelang CLI.

Commands:
    check   Parse rule files and report diagnostics
    dump    Print the descriptor tree of a rule file as JSON
    tokens  Print the token stream of a rule file
"""

from __future__ import annotations

import logging
import platform
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from rulelang._version import get_version
from rulelang.core.config import ParserConfig, find_config, load_config
from rulelang.core.errors import ConfigError, ParseError
from rulelang.core.lexer import tokenize
from rulelang.core.parser import parse_file, parse_files

app = typer.Typer(
    help="""rulelang - parser for production-rule files

Commands:
  • check: parse files and report diagnostics (exit 1 on errors)
  • dump: print the descriptor tree as JSON
  • tokens: print the token stream
""",
    no_args_is_help=True,
)

console = Console()

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Path to a rulelang.toml file"),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", help="Enable debug logging"),
]


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"rulelang version {get_version()}")
        typer.echo(f"Python {platform.python_implementation()} {platform.python_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version information",
        ),
    ] = None,
) -> None:
    """rulelang CLI main callback for global options."""
    pass


def _setup(config_path: Path | None, anchor: Path | None, verbose: bool) -> ParserConfig:
    """Load configuration and configure logging for a command."""
    if config_path is None and anchor is not None:
        config_path = find_config(anchor)

    try:
        config = load_config(config_path)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    logging.basicConfig(
        level=logging.DEBUG if verbose else config.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return config


@app.command()
def check(
    paths: Annotated[list[Path], typer.Argument(help="Rule files or directories")],
    config_path: ConfigOption = None,
    verbose: VerboseOption = False,
    show_source: Annotated[
        bool, typer.Option("--show-source", help="Print source lines around each error")
    ] = False,
) -> None:
    """Parse rule files and report every diagnostic."""
    config = _setup(config_path, paths[0], verbose)

    missing = [p for p in paths if not p.exists()]
    if missing:
        for path in missing:
            typer.echo(f"Error: no such file or directory: {path}", err=True)
        raise typer.Exit(code=2)

    results = parse_files(paths, config)
    if not results:
        typer.echo("No rule files found", err=True)
        raise typer.Exit(code=2)

    table = Table(title="Parse summary")
    table.add_column("File")
    table.add_column("Rules", justify="right")
    table.add_column("Queries", justify="right")
    table.add_column("Errors", justify="right")

    failed = False
    for result in results:
        source = None
        if show_source and result.has_errors:
            source = Path(result.source_name).read_text(encoding=config.encoding)

        for diagnostic in result.errors:
            typer.echo(
                f"{diagnostic.source_name}:{diagnostic.line}:{diagnostic.column}: "
                f"{diagnostic.kind.value}: {diagnostic.message}"
            )
            if source is not None:
                typer.echo(diagnostic.to_context(source).format())

        queries = len(result.package.queries)
        table.add_row(
            result.source_name,
            str(len(result.package.rules) - queries),
            str(queries),
            str(len(result.errors)),
            style="red" if result.has_errors else None,
        )
        failed = failed or result.has_errors

    console.print(table)

    if failed:
        raise typer.Exit(code=1)


@app.command()
def dump(
    path: Annotated[Path, typer.Argument(help="Rule file")],
    config_path: ConfigOption = None,
    verbose: VerboseOption = False,
    indent: Annotated[int, typer.Option("--indent", help="JSON indentation")] = 2,
) -> None:
    """Print the package descriptor of a rule file as JSON."""
    config = _setup(config_path, path, verbose)

    try:
        result = parse_file(path, config)
    except (OSError, ParseError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    typer.echo(result.package.model_dump_json(indent=indent))

    for diagnostic in result.errors:
        typer.echo(str(diagnostic), err=True)
    if result.has_errors:
        raise typer.Exit(code=1)


@app.command()
def tokens(
    path: Annotated[Path, typer.Argument(help="Rule file")],
    config_path: ConfigOption = None,
    verbose: VerboseOption = False,
    trivia: Annotated[
        bool, typer.Option("--trivia", help="Include whitespace and comment tokens")
    ] = False,
) -> None:
    """Print the token stream of a rule file."""
    config = _setup(config_path, path, verbose)

    try:
        text = path.read_text(encoding=config.encoding)
    except (OSError, UnicodeDecodeError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    table = Table(title=str(path))
    table.add_column("Line", justify="right")
    table.add_column("Col", justify="right")
    table.add_column("Type")
    table.add_column("Text")

    for token in tokenize(text, str(path), hash_comments=config.hash_comments):
        if token.is_trivia and not trivia:
            continue
        table.add_row(str(token.line), str(token.column), token.type.name, repr(token.value))

    console.print(table)


def main() -> None:
    app(standalone_mode=True)


if __name__ == "__main__":
    main()
