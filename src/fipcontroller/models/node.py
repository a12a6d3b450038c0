# src/fipcontroller/models/node.py

from pydantic import BaseModel, ConfigDict, Field


class NodeInfo(BaseModel):
    """
    Pydantic model for the parts of a Kubernetes node the controller acts on.

    Attributes:
        name: Node name
        unschedulable: Whether the node is cordoned (absent in the spec means False)
        server_id: Hetzner Cloud server id parsed from the node's providerID
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., description="Node name")
    unschedulable: bool = Field(default=False, description="Node is cordoned")
    server_id: int = Field(..., description="Hetzner Cloud server id")

    @property
    def schedulable(self) -> bool:
        return not self.unschedulable
