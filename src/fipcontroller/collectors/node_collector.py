# src/fipcontroller/collectors/node_collector.py

import logging
from typing import List, Set

from kubernetes_asyncio import client

from ..core.config import Config
from ..models.node import NodeInfo
from ..utils.k8s_utils import node_from_k8s

logger = logging.getLogger(__name__)


class ClusterInventory:
    """Answers which nodes of the cluster may currently receive a floating IP."""

    def __init__(self, api: client.CoreV1Api, config: Config):
        self._api = api
        self._scheme = config.PROVIDER_ID_SCHEME

    async def list_nodes(self) -> List[NodeInfo]:
        """
        Lists every node of the cluster.

        Raises:
            ProviderIDError: If any node lacks a parseable providerID.
        """
        nodes = await self._api.list_node(watch=False)
        return [node_from_k8s(node, self._scheme) for node in nodes.items]

    async def fetch_eligible_server_ids(self) -> Set[int]:
        """
        Returns the Hetzner Cloud server ids of all schedulable nodes.

        Always queries the API server; eligibility changes between reconciliations.
        """
        nodes = await self.list_nodes()
        eligible = {node.server_id for node in nodes if node.schedulable}
        logger.debug(
            "Eligible servers: %s (%d of %d nodes schedulable)",
            sorted(eligible),
            len(eligible),
            len(nodes),
        )
        return eligible

    async def close(self):
        """Close the Kubernetes API client."""
        await self._api.api_client.close()
        logger.debug("ClusterInventory Kubernetes client closed.")
