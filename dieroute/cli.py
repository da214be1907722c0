"""Command line entry point: read the design files, allocate paths, save a report."""

from __future__ import annotations

import argparse
import sys
import time
from collections.abc import Sequence

from dieroute.allocator import PathAllocator
from dieroute.files import (
    build_dies,
    read_network_file,
    read_position_file,
    read_sl_file,
    save_results,
)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dieroute",
        description="Allocate s-to-l paths across a capacity-limited die network.",
    )
    parser.add_argument("--position", default="design.die.position",
                        help="die position file")
    parser.add_argument("--network", default="design.die.network",
                        help="die network capacity file")
    parser.add_argument("--net", default="design.net", help="s/l node type file")
    parser.add_argument("--output", default="path_allocation_results.txt",
                        help="report file to write")
    return parser


def _error(message: str) -> None:
    print(message, file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the allocation and return the process exit status."""
    args = _parser().parse_args(argv)
    started = time.perf_counter()

    try:
        die_nodes = read_position_file(args.position)
    except OSError:
        _error(f"Error: Cannot open position file {args.position}")
        die_nodes = []
    if not die_nodes:
        _error("fail to catch ./position")
        return 1
    print(f"node num: {len(die_nodes)}")

    try:
        capacity = read_network_file(args.network)
    except OSError:
        _error(f"Error: Cannot open network file {args.network}")
        capacity = []
    if not capacity:
        _error("fail to catch ./network")
        return 1
    print(f"capacity.size: {len(capacity)}x{len(capacity[0])}")

    try:
        node_types = read_sl_file(args.net)
    except OSError:
        _error(f"Error: Cannot open s/l file {args.net}")
        node_types = {}
    if not node_types:
        _error("fail to catch ./net")
        return 1
    print(f"node_types num : {len(node_types)}")

    dies = build_dies(die_nodes, node_types)
    if len(dies) != len(capacity):
        _error("fail to match dies_num to capacity_num")
        return 1
    try:
        allocator = PathAllocator(dies, capacity)
    except ValueError as exc:
        _error(str(exc))
        return 1

    paths = allocator.allocate_all_paths()
    allocator.print_statistics()
    try:
        save_results(paths, allocator.get_usage(), args.output)
    except OSError:
        _error(f"Error: Cannot create output file {args.output}")
        return 1
    print(f"{time.perf_counter() - started:g}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())