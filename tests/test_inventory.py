from conftest import make_instance, make_pod

from podbalance.lib.rebalance.inventory import OwnerReference, aggregate_by_host, instance_from_pod


def test_aggregate_counts_sum_to_total():
    instances = [
        make_instance("a1", "node-a"),
        make_instance("b1", "node-b"),
        make_instance("a2", "node-a"),
        make_instance("p1", ""),
        make_instance("a3", "node-a"),
    ]
    loads = aggregate_by_host(instances)

    assert sum(load.count for load in loads.values()) == len(instances)
    assert set(loads) == {"node-a", "node-b", ""}
    assert loads["node-a"].count == 3


def test_aggregate_preserves_discovery_order():
    instances = [make_instance(f"pod-{i}", "node-a" if i % 2 else "node-b") for i in range(6)]
    loads = aggregate_by_host(instances)

    assert [i.name for i in loads["node-a"].instances] == ["pod-1", "pod-3", "pod-5"]
    assert [i.name for i in loads["node-b"].instances] == ["pod-0", "pod-2", "pod-4"]
    assert list(loads) == ["node-b", "node-a"]


def test_aggregate_keeps_duplicates():
    pod = make_instance("same", "node-a")
    loads = aggregate_by_host([pod, pod])
    assert loads["node-a"].count == 2


def test_aggregate_empty_input():
    assert aggregate_by_host([]) == {}


def test_instance_from_pod_maps_fields():
    pod = make_pod("web-1", node="node-a", owner_kinds=("ReplicaSet",), namespace="shop")
    instance = instance_from_pod(pod)

    assert instance.name == "web-1"
    assert instance.namespace == "shop"
    assert instance.host == "node-a"
    assert instance.owner_references == (OwnerReference(kind="ReplicaSet", name="web-1-replicaset"),)


def test_instance_from_unscheduled_pod_without_owners():
    instance = instance_from_pod(make_pod("bare"))
    assert instance.host == ""
    assert instance.owner_references == ()
