from .node_collector import ClusterInventory

__all__ = ["ClusterInventory"]
