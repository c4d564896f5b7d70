"""CCU v2 purge queue commands."""
import time
from typing import Annotated

import typer
from rich import print as cp
from typer import Argument, Option

from ccu_tools.ccu import v2
from ccu_tools.models.keyring_config import ConfigKey, KeyringConfig
from ccu_tools.models.settings import env
from ccu_tools.utils.cli import attempt, format_eta
from ccu_tools.utils.spinners import spinner

app = typer.Typer(no_args_is_help=True)

# Poll interval when the API does not suggest one
DEFAULT_PING_SECONDS = 60


def get_client() -> v2.Client:
    """Create a client from the environment, falling back to the keyring."""
    if env.has_ccu_credentials:
        return v2.Client.from_settings(env)

    cfg = KeyringConfig.load_from_keyring()
    return v2.Client(
        username=env.ccu_username or cfg.get_with_prompt(ConfigKey.CCU_USERNAME),
        password=env.ccu_password or cfg.get_with_prompt(ConfigKey.CCU_PASSWORD),
        base_url=env.ccu_base_url,
    )


@app.command()
def queue_length():
    """Show the number of requests in the default purge queue."""
    with get_client() as client:
        res = attempt(client.get_queue_length, timeout=env.timeout)
    cp(f"Queue length: {res.queue_length}")


@app.command()
def purge(
    objects: Annotated[list[str], Argument(help="URLs or CP codes to purge")],
    queue: Annotated[str, Option("--queue", "-q")] = v2.DEFAULT_QUEUE,
    purge_type: Annotated[str, Option("--type", help="arl or cpcode")] = "arl",
    action: Annotated[str, Option("--action", help="remove or invalidate")] = "remove",
    domain: Annotated[str, Option("--domain", help="production or staging")] = "production",
    wait: Annotated[bool, Option("--wait", "-w", help="Poll until the purge is done")] = False,
):
    """Submit a purge request."""
    request = v2.PurgeRequest(
        queue=queue, type=purge_type, action=action, domain=domain, objects=objects
    )
    with get_client() as client:
        cp(f"Purging {len(objects)} object(s) from the {domain} network...")
        res = attempt(client.purge, request, timeout=env.timeout)

        cp(f"✅  Purge ID: {res.purge_id}")
        cp(f"Estimated seconds: {res.estimated_seconds} (ETA {format_eta(res.eta())})")
        if res.support_id:
            cp(f"Support ID: {res.support_id}")

        if wait:
            wait_for_purge(client, res.purge_id, res.ping_after_seconds)


def wait_for_purge(client: v2.Client, purge_id: str, ping_after_seconds: int):
    """Poll a purge's status until it is done."""
    interval = ping_after_seconds or DEFAULT_PING_SECONDS
    with spinner(f"Waiting for purge {purge_id}...") as sp:
        while True:
            time.sleep(interval)
            status = attempt(client.get_purge_status, purge_id, timeout=env.timeout)
            if status.is_done():
                sp.text = f"Purge {purge_id} done at {status.completion_time}"
                break
            sp.text = f"Waiting for purge {purge_id} ({status.purge_status})..."


@app.command()
def status(purge_id: str):
    """Show the status of a purge request."""
    with get_client() as client:
        res = attempt(client.get_purge_status, purge_id, timeout=env.timeout)

    mark = "✅" if res.is_done() else "⏳"
    cp(f"{mark}  {res.purge_id or purge_id}: {res.purge_status}")
    cp(f"Submitted: {res.submission_time} by {res.submitted_by or 'unknown'}")
    if res.completion_time:
        cp(f"Completed: {res.completion_time}")
    cp(f"Original queue length: {res.original_queue_length}, "
       f"estimated seconds: {res.original_estimated_seconds}")
