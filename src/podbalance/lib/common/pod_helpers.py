"""
pod_helpers.py
- Contains logic for:
    - Listing every pod in the cluster, draining list pagination
    - Deleting a single pod by namespace and name
- Deletions are single attempts; failures are reported to the caller, never retried.
"""

from kubernetes.client.exceptions import ApiException
from loguru import logger
from urllib3.exceptions import HTTPError

from podbalance.core.constants import DEFAULT_LIST_PAGE_SIZE
from podbalance.core.errors import InventoryError
from podbalance.lib.rebalance.inventory import instance_from_pod


def list_instances(core_api, page_size=DEFAULT_LIST_PAGE_SIZE):
    """
    List pods across all namespaces as Instance snapshots.

    Args:
        core_api: kubernetes CoreV1Api
        page_size (int): Pods requested per list call.

    Returns:
        list[Instance]: Every pod, in listing order.

    Raises:
        InventoryError: if any page could not be fetched.
    """
    instances = []
    token = None
    pages = 0

    while True:
        try:
            page = core_api.list_pod_for_all_namespaces(limit=page_size, _continue=token)
        except (ApiException, HTTPError) as e:
            raise InventoryError(f"failed to list pods: {e}") from e

        pages += 1
        instances.extend(instance_from_pod(pod) for pod in page.items or [])
        token = getattr(page.metadata, "_continue", None) if page.metadata else None
        if not token:
            break

    logger.debug(f"[inventory] Listed {len(instances)} pods in {pages} page(s)")
    return instances


def delete_instance(core_api, namespace, name):
    """
    Delete one pod.

    Returns:
        tuple: (True, None) on success, (False, reason) on failure.
    """
    try:
        core_api.delete_namespaced_pod(name=name, namespace=namespace)
    except ApiException as e:
        return False, f"{e.status} {e.reason}"
    except HTTPError as e:
        return False, str(e)
    return True, None
