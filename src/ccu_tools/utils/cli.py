"""Shared command line helpers."""
from typing import Any, Callable, ParamSpec, TypeVar

import typer

from ccu_tools.ccu.errors import ApiError, CcuError
from ccu_tools.models.settings import env

T = TypeVar("T")
P = ParamSpec("P")


def attempt(func: Callable[P, T], *args: P.args, **kwargs: P.kwargs) -> T:
    """Call an API function, exiting with a message if it fails."""
    try:
        return func(*args, **kwargs)
    except CcuError as e:
        if env.verbose:
            raise
        typer.echo(f"❌  Error: {e}")
        if isinstance(e, ApiError) and e.support_id:
            typer.echo(f"   Support ID: {e.support_id}")
        raise SystemExit(1)


def format_eta(value: Any) -> str:
    if value is None:
        return "unknown"
    return value.astimezone().strftime("%Y-%m-%d %H:%M:%S %Z")
