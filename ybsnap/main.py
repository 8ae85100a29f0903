"""Command line entry point for the cluster clock snapshot collector."""

import argparse
import asyncio
import sys
from typing import List, Optional

from .config.loader import ConfigLoader
from .config.models import YbSnapConfig
from .config.settings import Settings
from .errors import YbSnapError
from .utils.logger import setup_logger
from .workflow import SnapshotWorkflow


def _split_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(',') if item.strip()]


def _port_list(value: str) -> List[int]:
    try:
        return [int(port) for port in _split_list(value)]
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port list: {value}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='ybsnap',
        description='Collect tablet server clock diagnostics from a YugabyteDB cluster',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Take a snapshot of all masters and tservers
  ybsnap --hosts 192.168.66.80,192.168.66.81 --ports 7000 --snapshot

  # Print clocks stored in snapshot 3 as seen by the leader
  ybsnap --print-clocks 3

  # Live heartbeat latency from the leader to every tserver
  ybsnap --hosts 192.168.66.80 --ports 7000 --adhoc-latency --details-enable
        """
    )

    parser.add_argument(
        '--config',
        default=Settings.config_path(),
        help='Path to YAML configuration file (default: YBSNAP_CONFIG env var)'
    )
    parser.add_argument('--hosts', type=_split_list, help='Comma separated hosts')
    parser.add_argument('--ports', type=_port_list, help='Comma separated ports')
    parser.add_argument('--parallel', type=int, help='Number of nodes read concurrently')
    parser.add_argument(
        '--log-level',
        default=Settings.log_level() or None,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: config file, LOG_LEVEL env var or WARNING)'
    )
    parser.add_argument(
        '--details-enable',
        action='store_true',
        help='Print rows from every node instead of the leader only'
    )
    parser.add_argument('--snapshot-comment', default='', help='Comment stored with a snapshot')

    action = parser.add_mutually_exclusive_group(required=True)
    action.add_argument('--snapshot', action='store_true', help='Take a snapshot')
    action.add_argument('--print-clocks', type=int, metavar='SNAPSHOT', help='Print clocks from a snapshot')
    action.add_argument('--adhoc-clocks', action='store_true', help='Read and print clocks now')
    action.add_argument('--adhoc-latency', action='store_true', help='Read and print heartbeat latency now')
    action.add_argument('--list-snapshots', action='store_true', help='List stored snapshots')

    return parser


def apply_overrides(config: YbSnapConfig, args: argparse.Namespace) -> YbSnapConfig:
    """Return config with command line values taking precedence over the file."""
    cluster = {}
    if args.hosts:
        cluster['hosts'] = args.hosts
    if args.ports:
        cluster['ports'] = args.ports
    if args.parallel is not None:
        cluster['parallel'] = args.parallel

    data = config.model_dump()
    data['cluster'].update(cluster)
    if args.log_level:
        data['logging']['level'] = args.log_level
    return YbSnapConfig(**data)


async def run(workflow: SnapshotWorkflow, args: argparse.Namespace) -> None:
    if args.snapshot:
        snapshot_id = await workflow.take_snapshot(args.snapshot_comment)
        print(f"snapshot number {snapshot_id}")
    elif args.print_clocks is not None:
        workflow.print_snapshot(args.print_clocks, args.details_enable)
    elif args.adhoc_clocks:
        await workflow.print_adhoc(args.details_enable)
    elif args.adhoc_latency:
        await workflow.print_adhoc_latency(args.details_enable)
    elif args.list_snapshots:
        workflow.list_snapshots()


def main(argv: Optional[List[str]] = None) -> int:
    """
    CLI entry point.

    Returns:
        int: Process exit code
    """
    args = build_parser().parse_args(argv)

    try:
        config = apply_overrides(ConfigLoader.load(args.config), args)
    except FileNotFoundError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"error: failed to load configuration: {e}", file=sys.stderr)
        return 1

    logger = setup_logger("ybsnap", config.logging.level)
    workflow = SnapshotWorkflow(config, logger)

    try:
        asyncio.run(run(workflow, args))
    except YbSnapError as e:
        logger.error(f"{type(e).__name__}: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
