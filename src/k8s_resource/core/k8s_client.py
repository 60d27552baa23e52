# src/k8s_resource/core/k8s_client.py
"""
Loads the Kubernetes client configuration for the current process and hands
out API clients. In-cluster service account credentials are tried first,
then the local kubeconfig.
"""

import asyncio
import logging
import typing

from kubernetes_asyncio import client, config

from .exceptions import ClusterConnectionError

logger = logging.getLogger(__name__)

# Serializes the first load; the result is shared by every later caller.
_CONFIG_LOCK = asyncio.Lock()
_CONFIG_LOADED = False
_LOAD_ERRORS: typing.List[str] = []


async def _load_incluster() -> None:
    config.load_incluster_config()


async def _load_kubeconfig() -> None:
    await config.load_kube_config()


_LOADERS = (
    ("in-cluster", _load_incluster),
    ("kubeconfig", _load_kubeconfig),
)


async def ensure_k8s_config() -> bool:
    """
    Loads the Kubernetes configuration once per process.

    Returns:
        bool: True if a configuration is loaded, False if no source worked.
    """
    global _CONFIG_LOADED

    if _CONFIG_LOADED:
        return True

    async with _CONFIG_LOCK:
        if _CONFIG_LOADED:
            return True

        _LOAD_ERRORS.clear()
        for source, loader in _LOADERS:
            try:
                logger.debug("Loading %s Kubernetes configuration...", source)
                await loader()
            except config.ConfigException as e:
                logger.debug("No %s configuration: %s", source, e)
                _LOAD_ERRORS.append(f"{source}: {e}")
            except Exception as e:
                logger.warning(f"Unexpected error loading {source} configuration: {e}")
                _LOAD_ERRORS.append(f"{source}: {e}")
            else:
                logger.info("Using %s Kubernetes configuration.", source)
                _CONFIG_LOADED = True
                return True

    logger.warning("Failed to load any Kubernetes configuration.")
    return False


async def require_k8s_config() -> None:
    """
    Raises ClusterConnectionError when no configuration can be loaded, so the
    CLI can stop before collecting anything.
    """
    if not await ensure_k8s_config():
        details = "; ".join(_LOAD_ERRORS)
        message = "Could not load a Kubernetes configuration (in-cluster or kubeconfig)."
        if details:
            message = f"{message} {details}"
        raise ClusterConnectionError(message)


async def get_core_v1_api() -> typing.Optional[client.CoreV1Api]:
    if await ensure_k8s_config():
        return client.CoreV1Api()
    return None


async def get_custom_objects_api() -> typing.Optional[client.CustomObjectsApi]:
    """
    Returns a CustomObjectsApi client, used to read the metrics.k8s.io API.
    """
    if await ensure_k8s_config():
        return client.CustomObjectsApi()
    return None
