"""Reading the die description files and writing allocation results."""

from __future__ import annotations

import re
import sys
from collections.abc import Mapping, Sequence
from os import PathLike

from dieroute.models import Die, Path

_INT_PATTERN = re.compile(r"[+-]?\d+")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_MAX_REPORTED_ERRORS = 5
_MAX_LISTED_PATHS = 1000
_PAD_ID_OFFSET = 10000

NodeTypes = dict[str, tuple[str, int]]


def _leading_int(text: str) -> tuple[int, bool] | None:
    """Parse a 32-bit integer at the start of ``text``.

    Returns the value and whether it used the whole text, or None when no
    integer can be read.
    """
    match = _INT_PATTERN.match(text)
    if match is None:
        return None
    value = int(match.group())
    if not _INT_MIN <= value <= _INT_MAX:
        return None
    return value, match.end() == len(text)


def read_position_file(filename: str | PathLike[str]) -> list[list[str]]:
    """Return the node names of each die, one list per ``name: nodes`` line.

    Empty lines and lines without a colon are skipped.
    """
    die_nodes: list[list[str]] = []
    with open(filename, encoding="utf-8") as handle:
        for line in handle:
            line = line.rstrip("\n")
            if not line:
                continue
            _, colon, nodes = line.partition(":")
            if not colon:
                continue
            die_nodes.append(nodes.split())
    return die_nodes


def read_network_file(filename: str | PathLike[str]) -> list[list[int]]:
    """Return the capacity matrix, one row of integers per non-empty line.

    Reading a row stops at the first token that is not an integer.
    """
    network: list[list[int]] = []
    with open(filename, encoding="utf-8") as handle:
        for line in handle:
            row: list[int] = []
            for token in line.split():
                parsed = _leading_int(token)
                if parsed is None:
                    break
                value, whole = parsed
                row.append(value)
                if not whole:
                    break
            if row:
                network.append(row)
    return network


def _warn(message: str) -> None:
    print(message, file=sys.stderr)


def read_sl_file(filename: str | PathLike[str]) -> NodeTypes:
    """Return a mapping from node name to its type (``"s"`` or ``"l"``) and weight.

    An s node may carry a weight after its type, defaulting to 1. Comment
    lines start with ``#``. Malformed lines are skipped with a warning on
    stderr; only the first five are reported individually.
    """
    node_types: NodeTypes = {}
    error_count = 0
    with open(filename, encoding="utf-8") as handle:
        for line_number, line in enumerate(handle, start=1):
            line = line.rstrip("\n")
            if not line or line.startswith("#"):
                continue
            tokens = line.split()
            if len(tokens) < 2:
                error_count += 1
                if error_count <= _MAX_REPORTED_ERRORS:
                    _warn(f"Warning: Invalid line {line_number}: {line}")
                continue
            node, node_type = tokens[0], tokens[1]
            weight = 1
            if node_type == "s" and len(tokens) > 2:
                parsed = _leading_int(tokens[2])
                if parsed is not None:
                    weight = parsed[0]
            if node_type not in ("s", "l"):
                error_count += 1
                if error_count <= _MAX_REPORTED_ERRORS:
                    _warn(f"Warning: Unknown type '{node_type}' at line {line_number}")
                continue
            node_types[node] = (node_type, weight)

    if error_count > _MAX_REPORTED_ERRORS:
        _warn(f"... and {error_count - _MAX_REPORTED_ERRORS} more errors")
    return node_types


def _stoi(text: str) -> int:
    parsed = _leading_int(text.lstrip())
    if parsed is None:
        raise ValueError(f"not an integer: {text!r}")
    return parsed[0]


def parse_node_id(node: str) -> int:
    """Return the numeric id of a node named ``g<digits>`` or ``gp<number>``.

    Pad nodes (``gp``) are offset by 10000. Raises ValueError for any other
    name.
    """
    if len(node) < 2 or node[0] != "g":
        raise ValueError(f"Invalid node format: {node}")
    id_str = node[1:]
    if id_str[0] == "p":
        return _PAD_ID_OFFSET + _stoi(id_str[1:])
    if not all(c in "0123456789" for c in id_str):
        raise ValueError(f"Non-numeric node ID: {node}")
    return _stoi(id_str)


def build_dies(
    die_nodes: Sequence[Sequence[str]], node_types: Mapping[str, tuple[str, int]]
) -> list[Die]:
    """Build one Die per entry of ``die_nodes`` from the typed nodes it lists.

    Nodes without a type are ignored; nodes whose id cannot be parsed are
    skipped and counted in a warning on stdout.
    """
    dies: list[Die] = []
    invalid_nodes = 0
    for nodes in die_nodes:
        s_points: list[int] = []
        l_points: list[int] = []
        for node in nodes:
            entry = node_types.get(node)
            if entry is None:
                continue
            try:
                node_id = parse_node_id(node)
            except ValueError:
                invalid_nodes += 1
                continue
            if entry[0] == "s":
                s_points.append(node_id)
            elif entry[0] == "l":
                l_points.append(node_id)
        dies.append(Die(tuple(s_points), tuple(l_points)))

    if invalid_nodes:
        print(f"Warning: Skipped {invalid_nodes} nodes with invalid IDs")
    return dies


def _format_path(path: Path) -> str:
    last = len(path.die_seq) - 1
    hops = []
    for position, die in enumerate(path.die_seq):
        hop = f"D{die}"
        if 0 < position < last and position - 1 < len(path.m_l):
            hop += f"(l{path.m_l[position - 1]})"
        hops.append(hop)
    return f"s{path.s_point} -> l{path.l_point}: " + " -> ".join(hops)


def save_results(
    paths: Sequence[Path],
    usage: Sequence[Sequence[int]],
    output_file: str | PathLike[str],
) -> None:
    """Write a report of the first 1000 paths and the used links to ``output_file``."""
    lines = [
        "=== 路径分配结果 ===",
        f"总路径数: {len(paths)}",
        "",
        "=== 路径详情 (前1000条) ===",
    ]
    lines.extend(_format_path(path) for path in paths[:_MAX_LISTED_PATHS])
    if len(paths) > _MAX_LISTED_PATHS:
        lines.append(f"还有 {len(paths) - _MAX_LISTED_PATHS} 条路径")
    lines.append("")
    lines.append("=== Die间链路使用统计 ===")
    for i, row in enumerate(usage):
        for j, used in enumerate(row):
            if i != j and used > 0:
                lines.append(f"D{i} -> D{j}: {used}")

    with open(output_file, "w", encoding="utf-8") as handle:
        handle.write("\n".join(lines) + "\n")
    print(f"data save to: {output_file}")