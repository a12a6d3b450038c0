# src/fipcontroller/models/floating_ip.py

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FloatingIP(BaseModel):
    """
    Pydantic model for a Hetzner Cloud floating IP as returned by the API.

    Unknown fields of the API payload (dns_ptr, home_location, labels...) are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    id: int = Field(..., description="Floating IP id")
    ip: str = Field(..., description="Address, or network for IPv6 floating IPs")
    server: Optional[int] = Field(None, description="Id of the server the IP is assigned to")
    name: Optional[str] = Field(None, description="Floating IP name")
    description: Optional[str] = Field(None, description="Floating IP description")

    @property
    def assigned(self) -> bool:
        return self.server is not None
