"""
kube_client.py
- Builds the Kubernetes CoreV1 API client used for listing and deleting pods.
- Resolves kubeconfig like kubectl and falls back to in-cluster service account config.
"""

from pathlib import Path

from kubernetes import client, config
from kubernetes.config.config_exception import ConfigException
from loguru import logger

from podbalance.core.config import default_kubeconfig_path
from podbalance.core.errors import ClusterConnectionError


def build_core_api(kubeconfig=None, context=None):
    """
    Load cluster credentials and return a CoreV1Api.

    Args:
        kubeconfig (str): Explicit kubeconfig path. Defaults to $KUBECONFIG or ~/.kube/config.
        context (str): Optional kubeconfig context name.

    Raises:
        ClusterConnectionError: if no usable configuration could be loaded.
    """
    if kubeconfig and not Path(kubeconfig).exists():
        raise ClusterConnectionError(f"kubeconfig not found: {kubeconfig}")

    path = kubeconfig or default_kubeconfig_path()

    try:
        if path and Path(path).exists():
            config.load_kube_config(config_file=path, context=context)
            logger.debug(f"[kube] Loaded kubeconfig from {path}")
        else:
            config.load_incluster_config()
            logger.debug("[kube] Loaded in-cluster configuration")
    except (ConfigException, OSError, TypeError, ValueError) as e:
        raise ClusterConnectionError(f"could not load cluster configuration: {e}") from e

    return client.CoreV1Api()
