"""Accounts command implementation.

Manages registered accounts, the OAuth client credentials and the
default account.
"""

import json
from pathlib import Path

import typer
from typing_extensions import Annotated

from gmcli.config import default_paths
from gmcli.config.schema import EmailAccount, OAuthConfig
from gmcli.storage import AccountStorage

app = typer.Typer(help="Manage accounts, credentials and the default account")

# OAuth fields never printed in full
SECRET_FIELDS = {"clientSecret", "refreshToken", "accessToken"}


def open_storage() -> AccountStorage:
    """Open the account store for the current user, exiting on failure."""
    paths = default_paths()
    try:
        return AccountStorage(paths)
    except OSError as e:
        typer.echo(f"Cannot access config directory {paths.config_dir}: {e}", err=True)
        raise typer.Exit(1)


@app.command("list")
def list_accounts():
    """List registered accounts. The default account is marked with '*'."""
    storage = open_storage()
    accounts = storage.get_all_accounts()

    if not accounts:
        typer.echo("No accounts configured.")
        return

    default_email = storage.get_default_email()
    for account in accounts:
        marker = "*" if account["email"] == default_email else " "
        typer.echo(f"{marker} {account['email']}")


@app.command()
def add(
    email: Annotated[str, typer.Argument(help="Email address of the account")],
    client_id: Annotated[
        str | None,
        typer.Option(
            "--client-id", help="OAuth client ID (default: stored credentials)"
        ),
    ] = None,
    client_secret: Annotated[
        str | None,
        typer.Option(
            "--client-secret", help="OAuth client secret (default: stored credentials)"
        ),
    ] = None,
    refresh_token: Annotated[
        str | None,
        typer.Option("--refresh-token", help="Refresh token from the OAuth flow"),
    ] = None,
):
    """Register an account, replacing any existing entry for the same email.

    --client-id and --client-secret must be given together. Without them
    the stored credentials are used.
    """
    if not email:
        typer.echo("Email must not be empty.", err=True)
        raise typer.Exit(1)

    if (client_id is None) != (client_secret is None):
        typer.echo("--client-id and --client-secret must be given together.", err=True)
        raise typer.Exit(1)

    storage = open_storage()

    if client_id is None or client_secret is None:
        credentials = storage.get_credentials()
        if credentials is None:
            typer.echo("No OAuth client credentials available.", err=True)
            typer.echo()
            typer.echo(
                "Run 'gmcli accounts credentials' "
                "or pass --client-id and --client-secret."
            )
            raise typer.Exit(1)
        client_id = credentials["clientId"]
        client_secret = credentials["clientSecret"]

    oauth2: OAuthConfig = {"clientId": client_id, "clientSecret": client_secret}
    if refresh_token:
        oauth2["refreshToken"] = refresh_token

    account: EmailAccount = {"email": email, "oauth2": oauth2}
    replaced = storage.has_account(email)

    try:
        storage.add_account(account)
    except OSError as e:
        typer.echo(f"Failed to save account: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"{'Updated' if replaced else 'Added'} account {email}")


@app.command()
def remove(
    email: Annotated[str, typer.Argument(help="Email address of the account")],
):
    """Remove a registered account."""
    storage = open_storage()

    try:
        removed = storage.delete_account(email)
        if removed and storage.get_default_email() == email:
            storage.clear_default_email()
    except OSError as e:
        typer.echo(f"Failed to save accounts: {e}", err=True)
        raise typer.Exit(1)

    if not removed:
        typer.echo(f"Account '{email}' not found.", err=True)
        raise typer.Exit(1)

    typer.echo(f"Removed account {email}")


@app.command()
def default(
    email: Annotated[
        str | None, typer.Argument(help="Account to use when none is specified")
    ] = None,
    clear: Annotated[
        bool, typer.Option("--clear", help="Unset the default account")
    ] = False,
):
    """Show, set or clear the default account."""
    storage = open_storage()

    if clear:
        storage.clear_default_email()
        typer.echo("Default account cleared.")
        return

    if email is None:
        current = storage.get_default_email()
        if current is None:
            typer.echo("No default account set.")
        elif not storage.has_account(current):
            typer.echo(f"{current} (not registered)")
        else:
            typer.echo(current)
        return

    if not storage.has_account(email):
        typer.echo(f"Account '{email}' not found.", err=True)
        typer.echo("Run 'gmcli accounts list' to see registered accounts.", err=True)
        raise typer.Exit(1)

    try:
        storage.set_default_email(email)
    except OSError as e:
        typer.echo(f"Failed to save default account: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Default account set to {email}")


@app.command()
def credentials(
    client_id: Annotated[str | None, typer.Argument(help="OAuth client ID")] = None,
    client_secret: Annotated[
        str | None, typer.Argument(help="OAuth client secret")
    ] = None,
    file: Annotated[
        Path | None,
        typer.Option(
            "--file",
            "-f",
            help="Client secret JSON downloaded from Google Cloud Console",
        ),
    ] = None,
):
    """Store the OAuth client credentials used for new accounts.

    Examples:
        gmcli accounts credentials xxxx.apps.googleusercontent.com SECRET
        gmcli accounts credentials --file ~/Downloads/client_secret.json
    """
    if file is not None:
        try:
            client_id, client_secret = _read_client_secret_file(file)
        except ValueError as e:
            typer.echo(f"Invalid credentials file: {e}", err=True)
            raise typer.Exit(1)

    if not client_id or not client_secret:
        typer.echo("Provide CLIENT_ID and CLIENT_SECRET, or --file.", err=True)
        raise typer.Exit(1)

    storage = open_storage()
    try:
        storage.set_credentials(client_id, client_secret)
    except OSError as e:
        typer.echo(f"Failed to save credentials: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Saved credentials to {storage.paths.credentials_file}")


@app.command()
def show(
    email: Annotated[
        str | None, typer.Argument(help="Account to show (default: default account)")
    ] = None,
):
    """Display an account. Secrets are redacted in output."""
    storage = open_storage()

    if email is None:
        email = storage.get_default_email()
        if email is None:
            typer.echo("No account given and no default account set.", err=True)
            raise typer.Exit(1)

    account = storage.get_account(email)
    if account is None:
        typer.echo(f"Account '{email}' not found.", err=True)
        raise typer.Exit(1)

    _display_account(account)


def _display_account(account: EmailAccount) -> None:
    """Display a single account with redacted secrets."""
    typer.echo(f"[{account['email']}]")
    for key, value in account.items():
        if key == "email":
            continue
        if isinstance(value, dict):
            for sub_key, sub_value in value.items():
                typer.echo(f"  {key}.{sub_key} = {_redact(sub_key, sub_value)}")
        else:
            typer.echo(f"  {key} = {_redact(key, value)}")


def _redact(key: str, value: object) -> object:
    if key in SECRET_FIELDS:
        # Redact secret but indicate it's set
        return "***REDACTED***" if value else "(not set)"
    return value


def _read_client_secret_file(path: Path) -> tuple[str, str]:
    """Extract client id/secret from a Google OAuth client JSON file.

    Google Cloud Console downloads wrap the values in an "installed"
    (desktop app) or "web" object.

    Raises:
        ValueError: If the file is unreadable or lacks the fields.
    """
    try:
        data = json.loads(path.expanduser().read_text(encoding="utf-8"))
    except OSError as e:
        raise ValueError(str(e)) from e
    except json.JSONDecodeError as e:
        raise ValueError(f"not valid JSON ({e})") from e

    if not isinstance(data, dict):
        raise ValueError("expected a JSON object")

    client = data.get("installed") or data.get("web") or data
    client_id = client.get("client_id") if isinstance(client, dict) else None
    client_secret = client.get("client_secret") if isinstance(client, dict) else None

    if not isinstance(client_id, str) or not isinstance(client_secret, str):
        raise ValueError("missing client_id or client_secret")

    return client_id, client_secret
