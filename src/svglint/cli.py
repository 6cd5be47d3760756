from __future__ import annotations

import json
import logging
from pathlib import Path

import typer

from .rules import RulesError, load_rules
from .walker import lint_tree

app = typer.Typer(add_completion=False, help="Lint a tree of SVG files against a fixed rule set.")


@app.command()
def main(
    root: Path = typer.Argument(
        Path("."),
        help="File or directory to lint (defaults to the working directory).",
    ),
    extensions: list[str] | None = typer.Option(
        None,
        "--ext",
        "-x",
        help="File extension to lint; repeat for several (default: svg).",
    ),
    ignore_dirs: list[str] | None = typer.Option(
        None,
        "--ignore",
        "-i",
        help="Directory name to skip; repeat for several (default: .git, node_modules).",
    ),
    rules_path: Path | None = typer.Option(
        None,
        "--rules",
        "-r",
        dir_okay=False,
        help="Optional YAML file overriding the built-in rule tables.",
    ),
    report: Path | None = typer.Option(
        None,
        "--report",
        "-o",
        dir_okay=False,
        help="Optional path to write the JSON report.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log traversal details to stderr."),
) -> None:
    """Print one line per invalid file and exit 1 if any file fails."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        rules = load_rules(rules_path)
    except RulesError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=2)

    result = lint_tree(
        root,
        extensions=extensions or None,
        ignore_dirs=ignore_dirs or None,
        rules=rules,
        emit=typer.echo,
    )
    if report is not None:
        report.write_text(json.dumps(result.to_dict(), indent=2, sort_keys=True))
    raise typer.Exit(code=0 if result.ok else 1)


def run() -> None:
    app(prog_name="svglint")
