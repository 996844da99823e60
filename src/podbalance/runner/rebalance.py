#!/usr/bin/env python3
"""
rebalance.py
- Runs one pod rebalancing pass: inventory, target, selection, eviction.
- Deletions are paced by an injectable delay and never retried.
- A failed deletion is logged and the pass moves on to the next pod.
"""

import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from loguru import logger

from podbalance.core.config import RebalanceSettings
from podbalance.core.errors import NoTargetComputable
from podbalance.lib.common.pod_helpers import list_instances, delete_instance
from podbalance.lib.rebalance.inventory import HostLoad, Instance, aggregate_by_host
from podbalance.lib.rebalance.selection import select_evictions
from podbalance.lib.rebalance.target import RebalancePlan, compute_plan


@dataclass
class PassSummary:
    total_instances: int = 0
    loads: Dict[str, HostLoad] = field(default_factory=dict)
    plan: Optional[RebalancePlan] = None
    selected: List[Instance] = field(default_factory=list)
    deleted: List[Instance] = field(default_factory=list)
    failed: List[Instance] = field(default_factory=list)


def _host_label(host):
    return host or "<unscheduled>"


class PacedDeleter:
    """Calls delete_instance with `delay` seconds between consecutive calls."""

    def __init__(self, core_api, delay, sleep=None):
        self.core_api = core_api
        self.delay = delay
        self.sleep = sleep or time.sleep
        self.calls = 0

    def __call__(self, instance):
        if self.calls and self.delay > 0:
            self.sleep(self.delay)
        self.calls += 1
        return delete_instance(self.core_api, instance.namespace, instance.name)


def evict(instances, deleter, summary, dry_run=False):
    for instance in instances:
        if dry_run:
            logger.info(f"[rebalance] Would delete pod {instance.namespace}/{instance.name} (dry run)")
            continue

        logger.info(f"[rebalance] Deleting pod {instance.namespace}/{instance.name}")
        ok, reason = deleter(instance)
        if ok:
            summary.deleted.append(instance)
        else:
            logger.error(f"[rebalance] Error deleting pod {instance.name}: {reason}")
            summary.failed.append(instance)


def plan_and_evict(instances, deleter, settings=None, dry_run=False) -> PassSummary:
    """
    Run the decision procedure over an already-listed inventory and evict the
    selected pods through `deleter`.
    """
    settings = settings or RebalanceSettings()
    summary = PassSummary(total_instances=len(instances))

    logger.info(f"[rebalance] There are {len(instances)} pods in the cluster")
    for instance in instances:
        logger.debug(f"[rebalance] Pod name: {instance.name}, node: {_host_label(instance.host)}")

    summary.loads = aggregate_by_host(instances)

    try:
        plan = compute_plan(
            summary.loads,
            threshold=settings.adjustment_threshold,
            adjustment=settings.target_adjustment,
        )
    except NoTargetComputable as e:
        logger.warning(f"[rebalance] {e}. Skipping evictions.")
        for host, load in summary.loads.items():
            logger.info(f"[rebalance] {_host_label(host)}: {load.count}")
        return summary

    summary.plan = plan
    logger.info(f"[rebalance] Ideal pods per node: {plan.ideal}")
    logger.info(f"[rebalance] Ideal pods per node (adjusted): {plan.target}")

    logger.info("[rebalance] Pods per node:")
    for host, load in summary.loads.items():
        logger.info(f"[rebalance] {_host_label(host)}: {load.count}. Adjustment: {plan.surpluses[host]}")

    for host in plan.overloaded():
        load = summary.loads[host]
        logger.info(
            f"[rebalance] Node {_host_label(host)} has {load.count} pods, more than ideal [{plan.target}]"
        )
        selected = select_evictions(load.instances, plan.surpluses[host], settings.owner_kinds)
        logger.info(f"[rebalance] Selected {len(selected)} pods to delete")
        summary.selected.extend(selected)
        evict(selected, deleter, summary, dry_run=dry_run)

    logger.info(
        f"[rebalance] Pass complete: {len(summary.deleted)} deleted, "
        f"{len(summary.failed)} failed, {len(summary.selected)} selected"
    )
    return summary


def run_pass(core_api, settings=None, dry_run=False, sleep=None) -> PassSummary:
    """
    List every pod and run one rebalancing pass against the cluster.

    Raises:
        InventoryError: if the pod listing failed.
    """
    settings = settings or RebalanceSettings()
    instances = list_instances(core_api, page_size=settings.list_page_size)
    deleter = PacedDeleter(core_api, settings.eviction_delay_seconds, sleep=sleep)
    return plan_and_evict(instances, deleter, settings=settings, dry_run=dry_run)
