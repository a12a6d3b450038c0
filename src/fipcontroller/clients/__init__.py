from .hcloud_client import HcloudClient

__all__ = ["HcloudClient"]
