"""bizauth CLI - Key provisioning, URL signing and verification."""

import sys

import click
from rich.console import Console
from rich.markup import escape

from bizauth.common.errors import BizAuthError
from bizauth.common.logging import setup_logging
from bizauth.common.settings import get_settings
from bizauth.urlsign.authenticator import authenticate
from bizauth.urlsign.keygen import generate_key, generate_rsa_key
from bizauth.urlsign.repository import load_key_repository_file
from bizauth.urlsign.signer import CLIENT_PARAM, sign_url

console = Console()


@click.group()
@click.option("--log-level", default=None, help="Log level (default: BIZAUTH_LOG_LEVEL or INFO)")
def cli(log_level: str | None) -> None:
    """bizauth CLI - Generate client keys, sign and verify request URLs."""
    setup_logging(level=log_level)


@cli.command("keygen")
@click.option(
    "--bytes",
    "size",
    type=int,
    default=None,
    help="Number of random bytes (default: BIZAUTH_KEY_BYTES)",
)
@click.option("--rsa", "legacy_rsa", is_flag=True, help="Generate a legacy RSA PEM based key")
@click.option("--client", help="Print a key repository line for this client id")
def keygen(size: int | None, legacy_rsa: bool, client: str | None) -> None:
    """Generate a new client key."""
    if client is not None and (not client or " " in client):
        console.print("[red]Client id must be non-empty and contain no spaces[/red]")
        sys.exit(1)

    try:
        if legacy_rsa:
            key = generate_rsa_key()
        else:
            key = generate_key(size if size is not None else get_settings().key_bytes)
    except BizAuthError as exc:
        console.print(f"[red]Error: {escape(exc.message)}[/red]", soft_wrap=True)
        sys.exit(1)

    click.echo(f"{client} {key}" if client else key)


@cli.command("sign")
@click.argument("url")
@click.option("--key", "-k", required=True, help="URL-safe base64 client key")
def sign(url: str, key: str) -> None:
    """Sign URL and print it with its signature appended."""
    try:
        signed = sign_url(url, key)
    except BizAuthError as exc:
        console.print(f"[red]Error ({exc.code}): {escape(exc.message)}[/red]", soft_wrap=True, highlight=False)
        sys.exit(1)

    click.echo(signed)


@cli.command("verify")
@click.argument("url")
@click.option(
    "--repository",
    "-r",
    type=click.Path(dir_okay=False),
    default=None,
    help="Key repository file (default: BIZAUTH_KEY_REPOSITORY_PATH)",
)
def verify(url: str, repository: str | None) -> None:
    """Authenticate a signed URL against a key repository."""
    repo_path = repository or get_settings().key_repository_path

    try:
        keys = load_key_repository_file(repo_path)
    except OSError as exc:
        console.print(f"[red]Cannot read key repository {repo_path}: {escape(str(exc.strerror))}[/red]", soft_wrap=True)
        sys.exit(1)
    except UnicodeDecodeError:
        console.print(f"[red]Cannot read key repository {repo_path}: not valid UTF-8[/red]", soft_wrap=True)
        sys.exit(1)
    except BizAuthError as exc:
        console.print(f"[red]Invalid key repository: {escape(exc.message)}[/red]", soft_wrap=True)
        sys.exit(1)

    try:
        _, params = authenticate(keys, url)
    except BizAuthError as exc:
        console.print(f"[red]✗ Rejected ({exc.code}): {escape(exc.message)}[/red]", soft_wrap=True, highlight=False)
        sys.exit(1)

    console.print(f"[green]✓ Authenticated client {escape(params[CLIENT_PARAM][0])}[/green]", soft_wrap=True)


if __name__ == "__main__":
    cli()
