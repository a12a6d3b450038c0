# tests/conftest.py

from typing import Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from kubernetes_asyncio import client

from fipcontroller.collectors.node_collector import ClusterInventory
from fipcontroller.core.config import Config
from fipcontroller.models.floating_ip import FloatingIP


@pytest.fixture(autouse=True)
def mock_settings_env_vars(monkeypatch):
    """
    Autouse fixture giving every test a predictable configuration, isolated
    from the real environment.
    """
    monkeypatch.setenv("HCLOUD_TOKEN", "test-token")
    monkeypatch.setenv("HCLOUD_API_URL", "https://api.hetzner.cloud/v1")
    monkeypatch.delenv("HCLOUD_TIMEOUT", raising=False)
    monkeypatch.delenv("FLOATING_IP_PAGE_SIZE", raising=False)
    monkeypatch.delenv("PROVIDER_ID_SCHEME", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "INFO")


@pytest.fixture
def config():
    return Config()


def make_node(name: str, server_id: Optional[int], unschedulable: Optional[bool] = None) -> client.V1Node:
    """Builds a V1Node; server_id=None leaves providerID unset."""
    provider_id = f"hcloud://{server_id}" if server_id is not None else None
    return client.V1Node(
        metadata=client.V1ObjectMeta(name=name),
        spec=client.V1NodeSpec(provider_id=provider_id, unschedulable=unschedulable),
    )


def make_service(
    name: str,
    type_: str = "LoadBalancer",
    ingress_ips: Optional[List[str]] = None,
    namespace: str = "default",
) -> client.V1Service:
    """Builds a V1Service; ingress_ips=None leaves the load balancer status empty."""
    status = None
    if ingress_ips is not None:
        status = client.V1ServiceStatus(
            load_balancer=client.V1LoadBalancerStatus(
                ingress=[client.V1LoadBalancerIngress(ip=ip) for ip in ingress_ips]
            )
        )
    return client.V1Service(
        metadata=client.V1ObjectMeta(name=name, namespace=namespace),
        spec=client.V1ServiceSpec(type=type_),
        status=status,
    )


class FakeHcloud:
    """In-memory stand-in for HcloudClient that applies assignments to its own state."""

    def __init__(self, floating_ips: List[FloatingIP]):
        self.floating_ips: Dict[int, FloatingIP] = {fip.id: fip for fip in floating_ips}
        self.assign_calls = []
        self.list_calls = 0

    async def list_floating_ips(self) -> List[FloatingIP]:
        self.list_calls += 1
        return [fip.model_copy() for fip in self.floating_ips.values()]

    async def assign(self, floating_ip_id: int, server_id: int) -> dict:
        self.assign_calls.append((floating_ip_id, server_id))
        self.floating_ips[floating_ip_id] = self.floating_ips[floating_ip_id].model_copy(update={"server": server_id})
        return {"command": "assign_floating_ip", "status": "running"}

    def server_of(self, floating_ip_id: int) -> Optional[int]:
        return self.floating_ips[floating_ip_id].server


@pytest.fixture
def cluster_nodes() -> List[client.V1Node]:
    """Mutable list of nodes served by the mocked CoreV1Api."""
    return []


@pytest.fixture
def core_api(cluster_nodes):
    api = MagicMock(spec=client.CoreV1Api)

    async def list_node(**kwargs):
        return client.V1NodeList(items=list(cluster_nodes))

    api.list_node = AsyncMock(side_effect=list_node)
    api.api_client = MagicMock()
    api.api_client.close = AsyncMock()
    return api


@pytest.fixture
def inventory(core_api, config):
    return ClusterInventory(core_api, config)
