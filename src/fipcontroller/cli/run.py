# src/fipcontroller/cli/run.py
"""
Run command for the fipcontroller CLI.

Starts the reconciliation loop and keeps it running until the process is
stopped or an error escapes a reconciliation.
"""

import asyncio
import logging
import traceback
from typing import Optional

import httpx
import typer
from kubernetes_asyncio.client.rest import ApiException
from typing_extensions import Annotated

from ..clients.hcloud_client import HcloudClient
from ..collectors.node_collector import ClusterInventory
from ..core.config import Config
from ..core.controller import Controller
from ..core.exceptions import FipControllerError
from ..core.k8s_client import get_core_v1_api
from .utils import load_config

logger = logging.getLogger(__name__)

app = typer.Typer(name="run", help="Run the floating IP controller.")


async def _async_run(config: Config) -> None:
    api = await get_core_v1_api()
    inventory = ClusterInventory(api, config)
    try:
        async with HcloudClient(config) as hcloud:
            controller = Controller(api, inventory, hcloud, scheme=config.PROVIDER_ID_SCHEME)
            await controller.run()
    finally:
        await inventory.close()


@app.callback(invoke_without_command=True)
def run(
    ctx: typer.Context,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="Override LOG_LEVEL (DEBUG, INFO, WARNING...)."),
    ] = None,
) -> None:
    """
    Watch nodes and services and move floating IPs off unschedulable nodes.
    """
    if ctx.invoked_subcommand is not None:
        return

    config = load_config(log_level)
    logger.info("Starting floating IP controller...")

    try:
        asyncio.run(_async_run(config))
    except KeyboardInterrupt:
        logger.info("Shutting down floating IP controller.")
        raise typer.Exit()
    except (FipControllerError, ApiException, httpx.HTTPError) as e:
        logger.error("Reconciliation failed: %s", e)
        logger.debug("Traceback: %s", traceback.format_exc())
        raise typer.Exit(code=1)
