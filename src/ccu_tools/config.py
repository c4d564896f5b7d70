"""Stored credentials"""
from __future__ import annotations

from typing import Optional

import pyperclip
import rich
import typer
from typing_extensions import Annotated

from ccu_tools.models.keyring_config import ConfigKey, KeyringConfig

app = typer.Typer(no_args_is_help=True)
cp = rich.print


def store(key: ConfigKey, value: str | None):
    with KeyringConfig.load_from_keyring() as config:
        if value is None:
            config.pop(key, None)
        else:
            config[key] = value


@app.command(name="set")
def set_config(
        key: ConfigKey,
        value: Annotated[Optional[str], typer.Argument()] = None
):
    """Set a stored value, or clear it when no value is given."""
    store(key, value)
    cp(f"{'Cleared' if value is None else 'Saved'} key {repr(key.value)}")


@app.command(name="set-cp")
def set_cp_config(
    key: ConfigKey
):
    """Set a stored value from the clipboard."""
    value = pyperclip.paste()
    if not value:
        cp("❌  Clipboard is empty.")
        raise SystemExit(1)

    store(key, value)
    cp(f"Saved key {repr(key.value)} from clipboard ({len(value)} chars)")


@app.command()
def show():
    """Show which values are stored."""
    config = KeyringConfig.load_from_keyring()
    cp(config.to_masked_json())
