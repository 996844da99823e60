#!/usr/bin/env python3
"""
main.py
- Command-line entrypoint for a single pod rebalancing pass.
- Connects to the cluster, runs the pass, and exits.
- Exit code 1 on connection or listing failure; individual deletion errors do not change it.
"""

import argparse
import os
import sys

import sentry_sdk
from loguru import logger

from podbalance.core import config
from podbalance.core.errors import ClusterConnectionError, InventoryError
from podbalance.core.kube_client import build_core_api
from podbalance.runner.rebalance import run_pass


def init_sentry():
    """Enable Sentry error reporting when SENTRY_DSN is set."""
    dsn = os.getenv("SENTRY_DSN")
    if dsn:
        sentry_sdk.init(dsn=dsn, send_default_pii=True)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Evict surplus pods from overloaded nodes")
    parser.add_argument("--kubeconfig", default=None,
                        help="Path to kubeconfig (default: $KUBECONFIG or ~/.kube/config)")
    parser.add_argument("--context", default=None, help="Kubeconfig context to use")
    parser.add_argument("--config", default=config.REBALANCE_CONFIG_PATH,
                        help="Rebalance settings YAML (default: %(default)s)")
    parser.add_argument("--dry-run", action="store_true", help="Print intended deletions without applying")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    dry_run = args.dry_run or config.DRY_RUN
    debug = args.debug or config.DEBUG

    config.configure_logging(debug=debug)
    init_sentry()

    try:
        core_api = build_core_api(kubeconfig=args.kubeconfig, context=args.context)
    except ClusterConnectionError as e:
        logger.critical(f"[kube] {e}")
        return 1

    settings = config.load_settings(args.config)

    try:
        run_pass(core_api, settings=settings, dry_run=dry_run)
    except InventoryError as e:
        logger.critical(f"[inventory] {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
