import pytest

from conftest import make_instance

from podbalance.core.errors import NoTargetComputable
from podbalance.lib.rebalance.inventory import aggregate_by_host
from podbalance.lib.rebalance.target import compute_plan, compute_target


def loads_for(counts):
    instances = [
        make_instance(f"{host}-{i}", host)
        for host, count in counts.items()
        for i in range(count)
    ]
    return aggregate_by_host(instances)


def test_target_unchanged_at_or_below_threshold():
    assert compute_target(23, 4) == (5, 5)


def test_target_adjusted_above_threshold():
    assert compute_target(48, 4) == (12, 7)


def test_target_adjustment_is_configurable():
    assert compute_target(48, 4, threshold=20, adjustment=5) == (12, 12)
    assert compute_target(48, 4, threshold=5, adjustment=2) == (12, 10)


def test_target_zero_hosts_raises():
    with pytest.raises(NoTargetComputable):
        compute_target(0, 0)


def test_plan_surpluses():
    plan = compute_plan(loads_for({"A": 7, "B": 3, "C": 2}))

    assert plan.ideal == 4
    assert plan.target == 4
    assert plan.surpluses == {"A": 3, "B": -1, "C": -2}
    assert plan.overloaded() == ["A"]


def test_surplus_sum_matches_total():
    counts = {"A": 20, "B": 14, "C": 9, "D": 5}
    loads = loads_for(counts)
    plan = compute_plan(loads)
    total = sum(counts.values())

    assert sum(plan.surpluses.values()) == total - plan.target * len(counts)
    assert set(plan.surpluses) == set(loads)


def test_plan_includes_unscheduled_bucket_alongside_nodes():
    plan = compute_plan(loads_for({"A": 4, "": 2}))
    assert plan.target == 3
    assert plan.surpluses == {"A": 1, "": -1}


def test_plan_with_no_pods_raises():
    with pytest.raises(NoTargetComputable):
        compute_plan({})


def test_plan_with_only_unscheduled_pods_raises():
    with pytest.raises(NoTargetComputable) as excinfo:
        compute_plan(loads_for({"": 3}))
    assert excinfo.value.total_instances == 3
