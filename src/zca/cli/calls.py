"""CLI: zca resolve|keepalive|settings|encrypt|decrypt"""

import json

import click
from rich.console import Console

from zca import services
from zca.crypto.cipher import decrypt_params, encrypt_params

console = Console()


def _helpers():
    from zca.cli import main
    return main


@click.command("resolve")
@click.argument("service")
def resolve_cmd(service):
    """Print the host that serves SERVICE."""
    m = _helpers()
    click.echo(m._unwrap(services.resolve_for_session(m._load_session(), service)))


@click.command("keepalive")
def keepalive_cmd():
    """Ping the chat service."""
    m = _helpers()

    async def _ping():
        async with m._get_client() as client:
            with console.status("Pinging..."):
                result = await client.account.keep_alive()
        data = m._unwrap(result)
        console.print(f"[green]Alive (config_version={data['config_version']})[/green]")

    m._run(_ping())


@click.command("settings")
def settings_cmd():
    """Show account privacy settings."""
    m = _helpers()

    async def _settings():
        async with m._get_client() as client:
            result = await client.account.settings()
        data = m._unwrap(result)
        data.pop("raw", None)
        for name, value in data.items():
            console.print(f"{name}: [bold]{value}[/bold]")

    m._run(_settings())


@click.command("encrypt")
@click.argument("params_json")
def encrypt_cmd(params_json):
    """Encrypt PARAMS_JSON with the stored session key."""
    m = _helpers()
    try:
        params = json.loads(params_json)
    except json.JSONDecodeError as e:
        raise click.BadParameter(str(e), param_hint="PARAMS_JSON")
    click.echo(m._unwrap(encrypt_params(m._load_session().symmetric_key, params)))


@click.command("decrypt")
@click.argument("ciphertext")
def decrypt_cmd(ciphertext):
    """Decrypt CIPHERTEXT with the stored session key."""
    m = _helpers()
    data = m._unwrap(decrypt_params(m._load_session().symmetric_key, ciphertext))
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))
