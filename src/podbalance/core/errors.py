"""
errors.py
- Exception types raised by the rebalancer.
- Fatal errors stop the run; NoTargetComputable only stops the eviction phase.
"""


class PodBalanceError(Exception):
    """Base class for all rebalancer errors."""


class ClusterConnectionError(PodBalanceError):
    """Cluster configuration could not be loaded or the API client built."""


class InventoryError(PodBalanceError):
    """Listing pods from the cluster failed."""


class NoTargetComputable(PodBalanceError):
    """No scheduled host was observed, so no per-host target exists."""

    def __init__(self, total_instances=0):
        self.total_instances = total_instances
        super().__init__(
            f"no eviction target computable ({total_instances} pods, no scheduled nodes)"
        )
