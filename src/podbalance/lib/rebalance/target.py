"""
target.py
- Computes the cluster-wide per-node pod target and each node's surplus.
"""

from dataclasses import dataclass, field
from typing import Dict

from podbalance.core.constants import (
    DEFAULT_ADJUSTMENT_THRESHOLD,
    DEFAULT_TARGET_ADJUSTMENT,
    UNSCHEDULED_HOST,
)
from podbalance.core.errors import NoTargetComputable


@dataclass
class RebalancePlan:
    ideal: int
    target: int
    surpluses: Dict[str, int] = field(default_factory=dict)

    def overloaded(self):
        """Hosts with a positive surplus, in plan order."""
        return [host for host, surplus in self.surpluses.items() if surplus > 0]


def compute_target(total, host_count,
                   threshold=DEFAULT_ADJUSTMENT_THRESHOLD,
                   adjustment=DEFAULT_TARGET_ADJUSTMENT):
    """
    Floor-divide total pods over hosts, then subtract `adjustment` once the
    result exceeds `threshold`.

    Returns:
        tuple: (ideal, target)
    """
    if host_count <= 0:
        raise NoTargetComputable(total)
    ideal = total // host_count
    target = ideal - adjustment if ideal > threshold else ideal
    return ideal, target


def compute_plan(loads, threshold=DEFAULT_ADJUSTMENT_THRESHOLD,
                 adjustment=DEFAULT_TARGET_ADJUSTMENT) -> RebalancePlan:
    """
    Build a RebalancePlan covering every host in `loads`.

    The unscheduled bucket counts as a host when real nodes are also present.
    When it is the only key there is nothing to balance toward.

    Raises:
        NoTargetComputable: if no scheduled host was observed.
    """
    total = sum(load.count for load in loads.values())
    if not loads or list(loads) == [UNSCHEDULED_HOST]:
        raise NoTargetComputable(total)

    ideal, target = compute_target(total, len(loads), threshold, adjustment)
    surpluses = {host: load.count - target for host, load in loads.items()}
    return RebalancePlan(ideal=ideal, target=target, surpluses=surpluses)
