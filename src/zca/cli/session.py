"""CLI: zca session import|show"""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from zca.models.credentials import Credentials
from zca.models.session import SessionContext

console = Console()


@click.group()
def session():
    """Stored session management."""


@session.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def session_import(path):
    """Import {"session": {...}, "credentials": {...}} from a JSON file."""
    from zca.cli.main import _save_config, _unwrap

    data = json.loads(Path(path).read_text(encoding="utf-8"))
    ctx = _unwrap(SessionContext.from_dict(data.get("session") or {}))
    creds = Credentials.model_validate(data.get("credentials") or {})
    _save_config({
        "session": ctx.to_dict(include_sensitive=True),
        "credentials": creds.model_dump(mode="json"),
    })
    console.print(f"[green]Session for {ctx.owner_id} stored.[/green]")


@session.command("show")
@click.option("--json-output", "--json", is_flag=True)
def session_show(json_output):
    """Show the stored session (without the key)."""
    from zca.cli.main import _load_session

    ctx = _load_session()
    data = ctx.to_dict()
    if json_output:
        click.echo(json.dumps(data, indent=2))
        return
    table = Table(title=f"Session {ctx.owner_id} (zpw_ver={ctx.protocol_version}, zpw_type={ctx.protocol_type})")
    table.add_column("Service", style="bold")
    table.add_column("Hosts")
    for name in sorted(ctx.service_directory):
        entry = ctx.service_directory[name]
        table.add_row(name, ", ".join(entry) if isinstance(entry, (list, tuple)) else entry)
    console.print(table)
