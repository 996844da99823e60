import pytest
from kubernetes import client
from kubernetes.client.exceptions import ApiException

from podbalance.lib.rebalance.inventory import Instance, OwnerReference


def make_pod(name, node=None, owner_kinds=(), namespace="default"):
    owners = [
        client.V1OwnerReference(api_version="apps/v1", kind=kind, name=f"{name}-{kind.lower()}", uid=f"uid-{name}")
        for kind in owner_kinds
    ] or None
    return client.V1Pod(
        metadata=client.V1ObjectMeta(name=name, namespace=namespace, owner_references=owners),
        spec=client.V1PodSpec(containers=[], node_name=node),
    )


def make_instance(name, host="", owner_kinds=(), namespace="default"):
    return Instance(
        name=name,
        namespace=namespace,
        host=host,
        owner_references=tuple(OwnerReference(kind=k, name=f"{name}-owner") for k in owner_kinds),
    )


class FakeCoreApi:
    """Stands in for CoreV1Api: serves pod pages and records deletions."""

    def __init__(self, pods=(), page_size=None, fail_delete=(), fail_list=False):
        self.pods = list(pods)
        self.page_size = page_size
        self.fail_delete = set(fail_delete)
        self.fail_list = fail_list
        self.list_calls = []
        self.deleted = []

    def list_pod_for_all_namespaces(self, limit=None, _continue=None):
        self.list_calls.append((limit, _continue))
        if self.fail_list:
            raise ApiException(status=403, reason="Forbidden")
        size = self.page_size or len(self.pods) or 1
        start = int(_continue or 0)
        items = self.pods[start:start + size]
        next_token = str(start + size) if start + size < len(self.pods) else None
        return client.V1PodList(items=items, metadata=client.V1ListMeta(_continue=next_token))

    def delete_namespaced_pod(self, name, namespace):
        if name in self.fail_delete:
            raise ApiException(status=404, reason="Not Found")
        self.deleted.append((namespace, name))


@pytest.fixture
def fake_api_factory():
    return FakeCoreApi
