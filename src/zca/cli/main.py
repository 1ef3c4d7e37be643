"""
zca CLI — `zca` command.

Commands:
  zca session import <file>   Store an exported session + credentials
  zca session show            Show the stored session (key hidden)
  zca resolve <service>       Print the host serving a service
  zca keepalive               Ping the chat service
  zca settings                Show account privacy settings
  zca encrypt <json>          Encrypt params with the session key
  zca decrypt <ciphertext>    Decrypt a payload with the session key
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

try:
    import click
    from rich.console import Console
except ImportError:
    raise SystemExit("CLI requires extras: pip install zca-py[cli]")

from zca.client import AsyncZaloClient
from zca.errors import Result
from zca.models.credentials import Credentials
from zca.models.session import SessionContext

console = Console()
CONFIG_FILE = Path.home() / ".zca" / "session.json"


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))
    CONFIG_FILE.chmod(0o600)


def _load_session() -> SessionContext:
    cfg = _load_config()
    if not cfg.get("session"):
        console.print("[red]No session stored. Run `zca session import <file>` first.[/red]")
        raise SystemExit(1)
    return _unwrap(SessionContext.from_dict(cfg["session"]))


def _get_client() -> AsyncZaloClient:
    cfg = _load_config()
    session = _load_session()
    if not cfg.get("credentials"):
        console.print("[red]No credentials stored. Run `zca session import <file>` first.[/red]")
        raise SystemExit(1)
    return AsyncZaloClient(session, Credentials.model_validate(cfg["credentials"]))


def _unwrap(result: Result[Any]) -> Any:
    if not result.ok:
        console.print(f"[red]{result.error}[/red]")
        raise SystemExit(1)
    return result.value


def _run(coro):
    return asyncio.run(coro)


@click.group()
@click.version_option("0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Log requests (params are redacted)")
def main(verbose: bool):
    """Zalo web API client."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# Register subcommands from separate modules
from zca.cli.session import session  # noqa: E402
from zca.cli.calls import resolve_cmd, keepalive_cmd, settings_cmd, encrypt_cmd, decrypt_cmd  # noqa: E402

main.add_command(session)
main.add_command(resolve_cmd)
main.add_command(keepalive_cmd)
main.add_command(settings_cmd)
main.add_command(encrypt_cmd)
main.add_command(decrypt_cmd)


if __name__ == "__main__":
    main()
