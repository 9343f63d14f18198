# csp_headers/cli.py
from __future__ import annotations

from typing import List, Optional

import typer

from csp_headers.config import ConfigError
from csp_headers.log import err
from csp_headers.parsers.html_parser import extract_hashes, parse_document
from csp_headers.policy.loader import load_inputs, parse_policy_assignments
from csp_headers.tools.generate import generate as generate_headers


app = typer.Typer(help="Generate Content-Security-Policy headers for a built static site")


# -----------------------
# Commands
# -----------------------
@app.command()
def generate(
    build_dir: Optional[str] = typer.Option(None, "--build-dir", help="Directory holding the built HTML"),
    exclude: Optional[List[str]] = typer.Option(None, "--exclude", help="Glob of paths to skip (repeatable)"),
    policy: Optional[List[str]] = typer.Option(
        None,
        "--policy",
        help="Static sources for a directive, e.g. \"script-src='self'\" (repeatable)",
    ),
    set_all_policies: Optional[bool] = typer.Option(
        None,
        "--set-all-policies/--no-set-all-policies",
        help="Emit every directive even when it has no sources",
    ),
    append: Optional[bool] = typer.Option(
        None,
        "--append/--truncate",
        help="Append to an existing _headers file instead of rewriting it",
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="YAML file with plugin inputs"),
) -> None:
    """
    Hash inline scripts of every page and write <build-dir>/_headers.
    """
    try:
        inputs = load_inputs(
            config_path=config_path,
            build_dir=build_dir,
            exclude=exclude,
            policies=parse_policy_assignments(policy or []),
            set_all_policies=set_all_policies,
            append=append,
        )
    except ConfigError as e:
        err(str(e))
        raise typer.Exit(code=1)

    result = generate_headers(inputs)
    typer.echo(f"Updated {result.updated} path(s).")


@app.command()
def hashes(
    path: str = typer.Argument(..., help="HTML file to inspect"),
    tag: str = typer.Option("script", "--tag", help="Element whose inline bodies are hashed"),
) -> None:
    """
    Print the hash-source tokens for one document, one per line.
    """
    for token in extract_hashes(parse_document(path), tag):
        typer.echo(token)


# -----------------------
# Entrypoint
# -----------------------
if __name__ == "__main__":
    app()
