# src/fipcontroller/cli/status.py
"""
Status command: a one-shot view of where every floating IP currently points.
"""

import asyncio
import logging
from typing import List, Optional, Set

import httpx
import typer
from kubernetes_asyncio.client.rest import ApiException
from typing_extensions import Annotated
from rich.console import Console
from rich.table import Table

from ..clients.hcloud_client import HcloudClient
from ..collectors.node_collector import ClusterInventory
from ..core.config import Config
from ..core.exceptions import FipControllerError
from ..core.k8s_client import get_core_v1_api
from ..models.floating_ip import FloatingIP
from ..models.node import NodeInfo
from .utils import load_config

logger = logging.getLogger(__name__)

app = typer.Typer(name="status", help="Show floating IP assignments.")


async def _collect(config: Config):
    api = await get_core_v1_api()
    inventory = ClusterInventory(api, config)
    try:
        async with HcloudClient(config) as hcloud:
            floating_ips = await hcloud.list_floating_ips()
        nodes = await inventory.list_nodes()
    finally:
        await inventory.close()
    return floating_ips, nodes


def render_status(floating_ips: List[FloatingIP], nodes: List[NodeInfo], console: Console = None) -> None:
    """Prints one row per floating IP with the node behind its server and whether it is eligible."""
    console = console or Console()
    if not floating_ips:
        console.print("No floating IPs found.", style="yellow")
        return

    by_server = {node.server_id: node for node in nodes}
    eligible: Set[int] = {node.server_id for node in nodes if node.schedulable}

    table = Table(title="Floating IPs", header_style="bold magenta")
    table.add_column("ID", justify="right")
    table.add_column("IP", style="cyan")
    table.add_column("Name")
    table.add_column("Server", justify="right")
    table.add_column("Node", style="cyan")
    table.add_column("Eligible")

    for fip in sorted(floating_ips, key=lambda f: f.id):
        node = by_server.get(fip.server)
        if not fip.assigned:
            state = "[red]unassigned[/red]"
        elif fip.server in eligible:
            state = "[green]yes[/green]"
        else:
            state = "[red]no[/red]"
        table.add_row(
            str(fip.id),
            fip.ip,
            fip.name or "",
            str(fip.server) if fip.assigned else "-",
            node.name if node else "-",
            state,
        )
    console.print(table)


@app.callback(invoke_without_command=True)
def status(
    ctx: typer.Context,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="Override LOG_LEVEL (DEBUG, INFO, WARNING...)."),
    ] = None,
) -> None:
    """
    List floating IPs with the node they are attached to.
    """
    if ctx.invoked_subcommand is not None:
        return

    config = load_config(log_level)
    try:
        floating_ips, nodes = asyncio.run(_collect(config))
    except (FipControllerError, ApiException, httpx.HTTPError) as e:
        logger.error("Failed to collect status: %s", e)
        raise typer.Exit(code=1)
    render_status(floating_ips, nodes)
