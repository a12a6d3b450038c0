import asyncio
import logging

from kubernetes_asyncio import client, config

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

_CONFIG_LOCK = asyncio.Lock()
_CONFIG_LOADED = False


async def ensure_k8s_config() -> None:
    """
    Ensures that the Kubernetes configuration is loaded exactly once.

    In-cluster configuration is tried first, then the local kubeconfig.

    Raises:
        ConfigError: If neither configuration could be loaded.
    """
    global _CONFIG_LOADED

    if _CONFIG_LOADED:
        return

    async with _CONFIG_LOCK:
        if _CONFIG_LOADED:
            return

        try:
            logger.debug("Attempting to load in-cluster Kubernetes config...")
            config.load_incluster_config()
            logger.info("Loaded in-cluster Kubernetes configuration.")
            _CONFIG_LOADED = True
            return
        except config.ConfigException:
            logger.debug("In-cluster config not found.")

        try:
            logger.debug("Attempting to load local kubeconfig...")
            await config.load_kube_config()
            logger.info("Loaded Kubernetes configuration from kubeconfig file.")
            _CONFIG_LOADED = True
            return
        except config.ConfigException as e:
            raise ConfigError(f"Failed to load any Kubernetes configuration: {e}") from e


async def get_core_v1_api() -> client.CoreV1Api:
    """
    Returns a configured CoreV1Api instance.
    Safe to call concurrently.
    """
    await ensure_k8s_config()
    return client.CoreV1Api()
