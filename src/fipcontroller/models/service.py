# src/fipcontroller/models/service.py

from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field

LOAD_BALANCER = "LoadBalancer"


class ServiceInfo(BaseModel):
    """Pydantic model for a Kubernetes service and its published ingress IPs."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., description="Service name")
    namespace: Optional[str] = Field(None, description="Service namespace")
    type: Optional[str] = Field(None, description="Service type (ClusterIP, LoadBalancer, ...)")
    ingress_ips: FrozenSet[str] = Field(default_factory=frozenset, description="Load balancer ingress IPs")

    @property
    def is_load_balancer(self) -> bool:
        return self.type == LOAD_BALANCER
