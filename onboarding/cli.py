"""CLI for Bank Onboarding operators."""
import asyncio
import click
import json
import os

from onboarding.core.config import settings
from onboarding.domain.encryption.errors import EncryptionError
from onboarding.domain.encryption.field_encryption import get_sensitive_fields
from onboarding.domain.encryption.key_provider import get_or_create_master_key


@click.group()
def cli():
    """Bank Onboarding CLI."""
    pass


@cli.group()
def key():
    """Manage the encryption master key."""
    pass


@key.command("init")
def init_key():
    """Resolve the master key, creating the key file if needed."""
    env_key = (settings.ENCRYPTION_KEY or "").strip()
    if len(env_key) >= settings.ENCRYPTION_KEY_MIN_LENGTH:
        click.echo("✓ Using master key from ENCRYPTION_KEY")
        return

    path = os.path.abspath(settings.ENCRYPTION_KEY_PATH)
    existed = os.path.exists(path)
    try:
        get_or_create_master_key(settings)
    except EncryptionError as e:
        raise click.ClickException(str(e))

    if existed:
        click.echo(f"✓ Using existing key file {path}")
    else:
        click.echo(f"✓ Generated new key file {path}")
        click.echo("  Back it up securely; applications cannot be decrypted without it.")


@cli.command("fields")
@click.option("--format", "fmt", type=click.Choice(["list", "json"]), default="list")
def list_fields(fmt: str):
    """List field names that are encrypted at rest."""
    fields = get_sensitive_fields()
    if fmt == "json":
        click.echo(json.dumps(fields, indent=2))
    else:
        for name in fields:
            click.echo(name)


@cli.group()
def application():
    """Inspect stored applications."""
    pass


@application.command("show")
@click.argument("application_id")
def show_application(application_id: str):
    """Print a stored application with sensitive fields decrypted."""
    from onboarding.dependencies import get_application_service

    service = get_application_service()
    result = asyncio.run(service.get_application(application_id))
    if result is None:
        click.echo(f"Error: Application '{application_id}' not found", err=True)
        raise SystemExit(1)
    click.echo(json.dumps(result, indent=2))


if __name__ == "__main__":
    cli()
