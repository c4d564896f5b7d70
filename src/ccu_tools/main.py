from typing import Annotated, Optional

import typer

from ccu_tools import config, v2, v3
from ccu_tools.models.settings import env
from ccu_tools.utils.logger import setup_logger

app = typer.Typer(no_args_is_help=True)
app.add_typer(v2.app, name="v2", help="CCU v2 purge queues.")
app.add_typer(v3.app, name="v3", help="CCU v3 Fast Purge.")
app.add_typer(config.app, name="config", help="Stored credentials.")


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log requests and show tracebacks")] = False,
    timeout: Annotated[Optional[float], typer.Option("--timeout", help="Request timeout in seconds")] = None,
):
    """Akamai Cache Control Utility tools."""
    if verbose:
        env.verbose = True
    if timeout is not None:
        env.timeout = timeout
    setup_logger(verbose=env.verbose)
