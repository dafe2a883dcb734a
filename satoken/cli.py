"""Command line interface for fetching service account access tokens."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from satoken.config import load_config
from satoken.errors import SatokenError
from satoken.pipeline import issue_token

app = typer.Typer(
    help="Get an OAuth2 access token for a service account using the JWT-bearer grant."
)


@app.command()
def main(
    creds: Path = typer.Option(
        ..., "--creds", help="Service account JSON key file", dir_okay=False
    ),
    scope: Optional[str] = typer.Option(
        None, "--scope", help="Space-delimited OAuth scopes (default: cloud-platform)"
    ),
    inquire: bool = typer.Option(
        False, "--inquire", help="Query the token info endpoint for the new token"
    ),
    url: Optional[str] = typer.Option(
        None, "--url", help="GET this URL with the new token and print the body"
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", help="YAML configuration file"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log claims, assertion and HTTP exchanges"
    ),
) -> None:
    """
    Print an access token for the service account in ``--creds``.

    Example:
        satoken --creds ./sa-key.json
        satoken --creds ./sa-key.json --scope https://www.googleapis.com/auth/spreadsheets --inquire
    """
    try:
        config = load_config(str(config_path) if config_path else None)
        logging.basicConfig(
            level=logging.DEBUG if verbose else config.log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        result = issue_token(creds, scope=scope, inquire=inquire, url=url, config=config)
    except SatokenError as exc:
        typer.secho(f"Exception: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo(f"access token: {result.access_token}")
    if result.token_info is not None:
        typer.echo(f"\ntoken info:\n{result.token_info}")
    if result.resource is not None:
        typer.echo(f"\n{result.resource}")


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    app()
