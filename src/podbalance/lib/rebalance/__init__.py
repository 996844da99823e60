from podbalance.lib.rebalance.inventory import Instance, OwnerReference, HostLoad, aggregate_by_host, instance_from_pod
from podbalance.lib.rebalance.target import RebalancePlan, compute_target, compute_plan
from podbalance.lib.rebalance.selection import is_eviction_eligible, select_evictions
