# src/fipcontroller/core/reconciler.py
"""
Reconcilers moving floating IPs away from servers that can no longer serve them.

Both reconcilers recompute everything from fresh snapshots of the cluster and
of the Hetzner Cloud project, so replayed or duplicated events are harmless.
"""

import logging
import random
from typing import Iterable, List, Optional, Set, Tuple

from ..clients.hcloud_client import HcloudClient
from ..collectors.node_collector import ClusterInventory
from ..utils.k8s_utils import is_node_schedulable, node_from_k8s, service_from_k8s
from .exceptions import NoEligibleServerError

logger = logging.getLogger(__name__)

Assignment = Tuple[int, int]


def choose_random_server(eligible: Set[int], rng: random.Random) -> int:
    """Picks one eligible server uniformly at random."""
    if not eligible:
        raise NoEligibleServerError("No schedulable server left to receive floating IPs")
    return rng.choice(sorted(eligible))


def choose_first_server(eligible: Set[int]) -> int:
    """Picks the eligible server with the lowest id."""
    if not eligible:
        raise NoEligibleServerError("No schedulable server left to receive floating IPs")
    return min(eligible)


class NodeReconciler:
    """
    Moves the floating IPs of a node that became unschedulable.

    Each IP goes to its own randomly chosen schedulable server, spreading the
    load of an evicted node.
    """

    def __init__(
        self,
        inventory: ClusterInventory,
        hcloud: HcloudClient,
        scheme: str = "hcloud",
        rng: Optional[random.Random] = None,
    ):
        self.inventory = inventory
        self.hcloud = hcloud
        self.scheme = scheme
        self.rng = rng or random.Random()

    async def reconcile(self, node) -> List[Assignment]:
        if is_node_schedulable(node):
            logger.debug("Node '%s' is schedulable, nothing to do.", node.metadata.name)
            return []

        info = node_from_k8s(node, self.scheme)
        logger.info("node %s is unschedulable, finding its assigned floating ips", info.name)

        orphaned = [fip for fip in await self.hcloud.list_floating_ips() if fip.server == info.server_id]
        if not orphaned:
            logger.debug("No floating IPs assigned to server %s.", info.server_id)
            return []

        eligible = await self.inventory.fetch_eligible_server_ids()
        assignments = []
        for fip in orphaned:
            server_id = choose_random_server(eligible, self.rng)
            await self.hcloud.assign(fip.id, server_id)
            assignments.append((fip.id, server_id))
        return assignments


class ServiceReconciler:
    """
    Makes sure the floating IPs published by a load balancer service sit on schedulable servers.

    Every IP needing a move goes to the same server within one pass.
    """

    def __init__(self, inventory: ClusterInventory, hcloud: HcloudClient):
        self.inventory = inventory
        self.hcloud = hcloud

    async def reconcile(self, service) -> List[Assignment]:
        info = service_from_k8s(service)
        if not info.is_load_balancer:
            logger.debug("Service '%s' is of type %s, skipping.", info.name, info.type)
            return []
        if not info.ingress_ips:
            logger.debug("Service '%s' has no ingress IPs yet.", info.name)
            return []

        published = [fip for fip in await self.hcloud.list_floating_ips() if fip.ip in info.ingress_ips]
        if not published:
            return []

        eligible = await self.inventory.fetch_eligible_server_ids()
        misplaced = _misplaced(published, eligible)
        if not misplaced:
            logger.debug("Floating IPs of service '%s' are all on schedulable servers.", info.name)
            return []

        server_id = choose_first_server(eligible)
        assignments = []
        for fip in misplaced:
            logger.info("Reassigning %s to %s", fip.ip, server_id)
            await self.hcloud.assign(fip.id, server_id)
            assignments.append((fip.id, server_id))
        return assignments


def _misplaced(floating_ips: Iterable, eligible: Set[int]) -> list:
    return [fip for fip in floating_ips if not fip.assigned or fip.server not in eligible]
