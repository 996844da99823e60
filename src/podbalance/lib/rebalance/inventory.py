"""
inventory.py
- Pod snapshots and per-node load aggregation.
- Pods with no node assignment are grouped under the empty host key.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from podbalance.core.constants import UNSCHEDULED_HOST


@dataclass(frozen=True)
class OwnerReference:
    kind: str
    name: str


@dataclass(frozen=True)
class Instance:
    """Read-only view of a pod taken at the start of a pass."""

    name: str
    namespace: str
    host: str = UNSCHEDULED_HOST
    owner_references: Tuple[OwnerReference, ...] = ()


@dataclass
class HostLoad:
    host: str
    instances: List[Instance] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.instances)


def instance_from_pod(pod) -> Instance:
    """Convert a kubernetes V1Pod into an Instance snapshot."""
    metadata = pod.metadata
    owners = tuple(
        OwnerReference(kind=ref.kind, name=ref.name)
        for ref in (metadata.owner_references or [])
    )
    node_name = pod.spec.node_name if pod.spec is not None else None
    return Instance(
        name=metadata.name,
        namespace=metadata.namespace,
        host=node_name or UNSCHEDULED_HOST,
        owner_references=owners,
    )


def aggregate_by_host(instances) -> Dict[str, HostLoad]:
    """
    Group instances by host, keeping discovery order within each host.
    Dict order follows the first time each host was seen.
    """
    loads: Dict[str, HostLoad] = {}
    for instance in instances:
        load = loads.get(instance.host)
        if load is None:
            load = loads[instance.host] = HostLoad(host=instance.host)
        load.instances.append(instance)
    return loads
