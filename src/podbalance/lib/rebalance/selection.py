"""
selection.py
- Picks which pods to evict from an overloaded node.
- Only pods owned by a recognized controller kind are eligible; bare pods are never touched.
"""

from loguru import logger

from podbalance.core.constants import DEFAULT_OWNER_KINDS


def is_eviction_eligible(instance, owner_kinds=DEFAULT_OWNER_KINDS):
    """True if any owner reference kind exactly matches one of `owner_kinds`."""
    return any(ref.kind in owner_kinds for ref in instance.owner_references)


def select_evictions(instances, surplus, owner_kinds=DEFAULT_OWNER_KINDS):
    """
    Return the first `surplus` eligible instances in scan order.

    Ineligible instances are skipped without using a slot. If fewer than
    `surplus` are eligible, all eligible instances are returned.
    """
    selected = []
    if surplus <= 0:
        return selected

    for instance in instances:
        if len(selected) >= surplus:
            break
        if is_eviction_eligible(instance, owner_kinds):
            logger.debug(f"[select] {instance.namespace}/{instance.name} is part of a deployment")
            selected.append(instance)

    return selected
