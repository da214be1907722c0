"""Greedy allocation of s-to-l connections over a capacity-limited die network."""

from __future__ import annotations

import time
from collections import deque
from collections.abc import Sequence
from itertools import pairwise

from dieroute.models import Die, Path

_MAX_PATHS = 1000


def _percent(part: float, whole: float) -> float:
    return part / whole * 100 if whole else float("nan")


class PathAllocator:
    """Routes every s point to every l point on other dies, within link capacities."""

    def __init__(self, dies: Sequence[Die], capacity: Sequence[Sequence[int]]) -> None:
        self.dies: list[Die] = list(dies)
        total = len(self.dies)
        if len(capacity) != total or any(len(row) < total for row in capacity):
            raise ValueError(
                f"capacity matrix must be at least {total}x{total} to match the dies"
            )
        self.capacity: list[list[int]] = [list(row) for row in capacity]
        self.usage: list[list[int]] = [[0] * total for _ in range(total)]
        self.total_dies = total
        self.total_pairs = 0
        self.successful_pairs = 0
        self.paths: list[Path] = []
        self._path_cache: dict[tuple[int, int, int], list[tuple[int, ...]]] = {}

    def find_die(self, node: int, is_s_point: bool) -> int | None:
        """Return the index of the first die holding ``node``, or None."""
        for index, die in enumerate(self.dies):
            found = die.has_s_point(node) if is_s_point else die.has_l_point(node)
            if found:
                return index
        return None

    def find_paths(
        self, source_die: int, target_die: int, max_hops: int = 4
    ) -> list[list[int]]:
        """Breadth-first enumeration of loop-free die sequences from ``source_die``.

        A sequence ends when it reaches ``target_die`` or holds ``max_hops``
        dies; at most 1000 sequences are collected, shortest first.
        """
        key = (source_die, target_die, max_hops)
        cached = self._path_cache.get(key)
        if cached is None:
            cached = self._search_paths(source_die, target_die, max_hops)
            self._path_cache[key] = cached
        return [list(path) for path in cached]

    def _search_paths(
        self, source_die: int, target_die: int, max_hops: int
    ) -> list[tuple[int, ...]]:
        found: list[tuple[int, ...]] = []
        queue: deque[tuple[int, ...]] = deque([(source_die,)])
        while queue and len(found) < _MAX_PATHS:
            current = queue.popleft()
            last = current[-1]
            if last == target_die or len(current) >= max_hops:
                found.append(current)
                continue
            for next_die, cap in enumerate(self.capacity[last][: self.total_dies]):
                if next_die == last or cap == 0 or next_die in current:
                    continue
                queue.append(current + (next_die,))
        found.sort(key=len)
        return found

    def is_path_available(self, die_path: Sequence[int]) -> bool:
        """Return True if every link along ``die_path`` has spare capacity."""
        return all(
            self.usage[src][dst] < self.capacity[src][dst]
            for src, dst in pairwise(die_path)
        )

    def use_path(self, die_path: Sequence[int]) -> None:
        """Consume one unit of capacity on every link along ``die_path``."""
        for src, dst in pairwise(die_path):
            self.usage[src][dst] += 1

    def select_intermediate_l(self, die_id: int, used_l: Sequence[int]) -> int | None:
        """Return the first l point of ``die_id`` not in ``used_l``, or None."""
        taken = set(used_l)
        return next((l for l in self.dies[die_id].l_points if l not in taken), None)

    def allocate_single_path(self, s: int, l: int) -> bool:
        """Try to route ``s`` to ``l``; a routed path is appended to ``self.paths``.

        Points on the same die count as connected without a path.
        """
        s_die = self.find_die(s, True)
        l_die = self.find_die(l, False)
        if s_die is None or l_die is None:
            return False
        if s_die == l_die:
            return True

        for die_path in self.find_paths(s_die, l_die):
            if not self.is_path_available(die_path):
                continue
            relays: list[int] = []
            for intermediate in die_path[1:-1]:
                l_point = self.select_intermediate_l(intermediate, relays)
                if l_point is None:
                    break
                relays.append(l_point)
            if len(relays) == len(die_path) - 2:
                self.use_path(die_path)
                self.paths.append(Path(s, l, die_path, relays))
                return True
        return False

    def allocate_all_paths(self) -> list[Path]:
        """Route every s point to every l point on every other die.

        Returns the paths routed by this call, and reports progress on stdout.
        """
        start = time.perf_counter()
        first_new = len(self.paths)
        self.total_pairs += sum(
            len(src.s_points) * len(dst.l_points)
            for i, src in enumerate(self.dies)
            for j, dst in enumerate(self.dies)
            if i != j
        )
        print(f"{self.total_pairs} paths need alloting")

        for s_die, src in enumerate(self.dies):
            for l_die, dst in enumerate(self.dies):
                if s_die == l_die:
                    continue
                print(
                    f" Die{s_die} -> Die{l_die} "
                    f"({len(src.s_points)} s , {len(dst.l_points)} l )"
                )
                for s in src.s_points:
                    for l in dst.l_points:
                        if self.allocate_single_path(s, l):
                            self.successful_pairs += 1

        elapsed = int(time.perf_counter() - start)
        print(f"time cost: {elapsed}")
        ratio = _percent(self.successful_pairs, self.total_pairs)
        print(
            f"successful allocation: {self.successful_pairs}/{self.total_pairs} "
            f"({ratio:g}%)"
        )
        return self.paths[first_new:]

    def get_usage(self) -> list[list[int]]:
        """Return a copy of the per-link usage matrix."""
        return [list(row) for row in self.usage]

    def print_statistics(self) -> None:
        """Print the point counts of each die and the utilisation of each link."""
        print("\n=== total info ===")
        for index, die in enumerate(self.dies):
            print(f"Die{index}: {len(die.s_points)} s , {len(die.l_points)} l ")

        print("\n=== usage situation ===")
        total_capacity = 0
        total_used = 0
        for i in range(self.total_dies):
            for j in range(self.total_dies):
                cap = self.capacity[i][j]
                if i == j or cap <= 0:
                    continue
                used = self.usage[i][j]
                total_capacity += cap
                total_used += used
                print(f"Die{i}->Die{j}: {used}/{cap} ({_percent(used, cap):g}%)")

        overall = _percent(total_used, total_capacity)
        print(f"usage present: {total_used}/{total_capacity} ({overall:g}%)")