"""CCU v3 Fast Purge commands."""
from typing import Annotated, Optional

import typer
from rich import print as cp
from typer import Argument, Option

from ccu_tools.ccu import v3
from ccu_tools.models.settings import env
from ccu_tools.utils.cli import attempt

app = typer.Typer(no_args_is_help=True)


@app.command()
def purge(
    objects: Annotated[list[str], Argument(help="URLs, CP codes or tags to purge")],
    purge_type: Annotated[str, Option("--type", help="url, cpcode or tag")] = "url",
    action: Annotated[str, Option("--action", help="invalidate or delete")] = "invalidate",
    network: Annotated[str, Option("--network", help="production or staging")] = "production",
    hostname: Annotated[Optional[str], Option("--hostname", help="Host of URL paths")] = None,
    edgerc: Annotated[Optional[str], Option("--edgerc")] = None,
    section: Annotated[Optional[str], Option("--section")] = None,
):
    """Submit a Fast Purge request."""
    request = v3.PurgeRequest(
        type=purge_type,
        action=action,
        network=network,
        hostname=hostname or "",
        objects=objects,
    )
    client = v3.Client(
        edgerc=edgerc or env.edgerc,
        section=section or env.edgerc_section,
    )
    with client:
        cp(f"Requesting {action} of {len(objects)} {purge_type} object(s) on {network}...")
        res = attempt(client.purge, request, timeout=env.timeout)

    cp(f"✅  Purge ID: {res.purge_id}")
    cp(f"Estimated seconds: {res.estimated_seconds}")
    if res.support_id:
        cp(f"Support ID: {res.support_id}")
