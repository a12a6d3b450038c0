"""Keeps Hetzner Cloud floating IPs attached to schedulable Kubernetes nodes."""

__version__ = "0.3.0"
