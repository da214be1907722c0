# dieroute

`dieroute` routes signals between the dies of a multi-die design. Each connection runs from a
source point (`s`) on one die to a load point (`l`) on another die. Every directed die-to-die link
has a capacity. A route may pass through intermediate dies. On each intermediate die it uses one of
that die's own `l` points as a relay.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Input files

- **Position file**: one line per die, in the form `<label>: node node node ...`. Empty lines and
  lines without a colon are skipped.
- **Network file**: a matrix of integers, one row per non-empty line. Row `i`, column `j` is the
  capacity of the link from die `i` to die `j`. A row stops at the first token that is not an
  integer.
- **Net file**: one node per line, in the form `<node> s [weight]` or `<node> l`. Lines starting
  with `#` are comments. Malformed lines and unknown types are skipped with a warning on stderr.
  Only the first five warnings are shown one by one, followed by a count of the rest.

Node names must be `g<digits>`, or `gp<number>`, which maps to `10000 + number`. Nodes listed in the
position file but missing from the net file are ignored. Nodes with names that cannot be parsed are
skipped, and their number is reported on stdout.

## Command line

```
dieroute [--position FILE] [--network FILE] [--net FILE] [--output FILE]
```

| Option       | Default                       |
|--------------|-------------------------------|
| `--position` | `design.die.position`         |
| `--network`  | `design.die.network`          |
| `--net`      | `design.net`                  |
| `--output`   | `path_allocation_results.txt` |

The command reads the three input files and tries to route every `s` point to every `l` point on
every other die. It prints progress and link utilisation to stdout, writes the report file, and
prints the elapsed time. The exit status is 1 in these cases:

- an input file cannot be opened or yields nothing;
- the number of dies differs from the number of rows in the capacity matrix;
- a capacity row is shorter than the number of dies;
- the report file cannot be written.

The report lists the total number of routed paths and details of the first 1000 paths, each in the
form `s<id> -> l<id>: D0 -> D2(l<relay>) -> D1`. It ends with the usage count of each used link.
Its headings are in Chinese.

## Library use

```python
from dieroute.allocator import PathAllocator
from dieroute.files import build_dies, read_network_file, read_position_file, read_sl_file, save_results

dies = build_dies(read_position_file("design.die.position"), read_sl_file("design.net"))
capacity = read_network_file("design.die.network")

allocator = PathAllocator(dies, capacity)
paths = allocator.allocate_all_paths()
allocator.print_statistics()
save_results(paths, allocator.get_usage(), "path_allocation_results.txt")
```

- `dieroute.models.Die` holds the ordered `s_points` and `l_points` of a die.
  `has_s_point(node)` and `has_l_point(node)` test membership.
- `dieroute.models.Path` records `s_point`, `l_point`, the die sequence `die_seq`, and the relay
  points `m_l`.
- `PathAllocator(dies, capacity)` raises `ValueError` if the capacity matrix is smaller than the
  number of dies.
  - `find_die(node, is_s_point)` returns the index of the first die holding the node, or `None`.
  - `find_paths(source_die, target_die, max_hops=4)` enumerates loop-free die sequences
    breadth-first. Each result is cached. A sequence ends when it reaches the target or holds
    `max_hops` dies. At most 1000 sequences are kept, sorted shortest first.
  - `allocate_single_path(s, l)` tries the candidate sequences in that order. It takes the first
    one whose links all have spare capacity and whose intermediate dies each supply a distinct
    unused `l` point. The routed `Path` is appended to `allocator.paths`. If both points are on the
    same die, the pair counts as connected without a path.
  - `allocate_all_paths()` routes all pairs and returns the paths routed by that call.
  - `get_usage()` returns a copy of the usage matrix.
  - `print_statistics()` prints the point counts of each die and the utilisation of each link.
- `dieroute.files.parse_node_id(node)` raises `ValueError` for names it cannot parse. The readers
  raise `OSError` for files that cannot be opened.

## Limitations

Routing is greedy, in a fixed order: source die, then target die, then points in file order. A
route is never revisited once it is allocated. The weight given to `s` nodes in the net file is
read and kept in the node-type mapping, but allocation does not use it.