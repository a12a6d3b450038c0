# src/fipcontroller/utils/k8s_utils.py
"""
Helpers turning kubernetes_asyncio objects into the controller's models.
"""

from ..core.exceptions import MalformedResourceError, ProviderIDError
from ..models.node import NodeInfo
from ..models.service import ServiceInfo


def parse_provider_id(provider_id: str, scheme: str = "hcloud") -> int:
    """
    Extract the server id from a providerID such as 'hcloud://1234567'.

    Raises:
        ProviderIDError: If the value is missing, has another scheme or a non-integer id.
    """
    if not provider_id:
        raise ProviderIDError("Node has no providerID")
    prefix = f"{scheme}://"
    if not provider_id.startswith(prefix):
        raise ProviderIDError(f"providerID '{provider_id}' does not start with '{prefix}'")
    raw_id = provider_id[len(prefix) :]
    try:
        return int(raw_id)
    except ValueError as e:
        raise ProviderIDError(f"providerID '{provider_id}' does not end with an integer server id") from e


def is_node_schedulable(node) -> bool:
    """A node is schedulable unless its spec sets unschedulable to true."""
    spec = node.spec
    if spec is None:
        raise MalformedResourceError(f"Node '{_name(node)}' has no spec")
    return not bool(spec.unschedulable)


def node_from_k8s(node, scheme: str = "hcloud") -> NodeInfo:
    """Convert a V1Node into a NodeInfo."""
    name = _name(node)
    if node.spec is None:
        raise MalformedResourceError(f"Node '{name}' has no spec")
    try:
        server_id = parse_provider_id(node.spec.provider_id, scheme)
    except ProviderIDError as e:
        raise ProviderIDError(f"Node '{name}': {e}") from e
    return NodeInfo(name=name, unschedulable=bool(node.spec.unschedulable), server_id=server_id)


def service_from_k8s(service) -> ServiceInfo:
    """
    Convert a V1Service into a ServiceInfo.

    Ingress entries without an IP (hostname-only load balancers) are skipped; a
    missing status or ingress list yields an empty set.
    """
    name = _name(service)
    if service.spec is None:
        raise MalformedResourceError(f"Service '{name}' has no spec")

    ingress = []
    status = service.status
    if status is not None and status.load_balancer is not None:
        ingress = status.load_balancer.ingress or []

    return ServiceInfo(
        name=name,
        namespace=service.metadata.namespace if service.metadata else None,
        type=service.spec.type,
        ingress_ips=frozenset(entry.ip for entry in ingress if entry.ip),
    )


def _name(obj) -> str:
    metadata = getattr(obj, "metadata", None)
    return getattr(metadata, "name", None) or "<unnamed>"
