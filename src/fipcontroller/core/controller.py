# src/fipcontroller/core/controller.py

import logging
import random
from typing import Optional

from kubernetes_asyncio import client

from ..clients.hcloud_client import HcloudClient
from ..collectors.node_collector import ClusterInventory
from .reconciler import NodeReconciler, ServiceReconciler
from .watcher import NodeEvent, ResourceKind, ServiceEvent, merge_streams, watch_applied

logger = logging.getLogger(__name__)


class Controller:
    """
    Consumes the merged node/service event stream and runs one reconciliation at a time.

    The next event is only pulled once the current reconciliation, including
    all of its API calls, has finished.
    """

    def __init__(
        self,
        api: client.CoreV1Api,
        inventory: ClusterInventory,
        hcloud: HcloudClient,
        scheme: str = "hcloud",
        rng: Optional[random.Random] = None,
    ):
        self.api = api
        self.node_reconciler = NodeReconciler(inventory, hcloud, scheme=scheme, rng=rng)
        self.service_reconciler = ServiceReconciler(inventory, hcloud)

    def events(self):
        return merge_streams(
            watch_applied(self.api.list_node, NodeEvent),
            watch_applied(self.api.list_service_for_all_namespaces, ServiceEvent),
        )

    async def handle(self, event):
        if event.kind is ResourceKind.NODE:
            return await self.node_reconciler.reconcile(event.node)
        return await self.service_reconciler.reconcile(event.service)

    async def run(self, events=None):
        """Runs until the event stream ends or an error escapes a reconciliation."""
        logger.info("Watching nodes and services.")
        if events is None:
            events = self.events()
        async for event in events:
            await self.handle(event)
        logger.info("Event stream ended.")
