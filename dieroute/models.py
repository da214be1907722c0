"""Data types describing dies and the paths routed between them."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Die:
    """A die holding source (s) and load (l) points, in their given order."""

    s_points: tuple[int, ...] = ()
    l_points: tuple[int, ...] = ()
    _s_set: frozenset[int] = field(init=False, repr=False, compare=False)
    _l_set: frozenset[int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "s_points", tuple(self.s_points))
        object.__setattr__(self, "l_points", tuple(self.l_points))
        object.__setattr__(self, "_s_set", frozenset(self.s_points))
        object.__setattr__(self, "_l_set", frozenset(self.l_points))

    def has_s_point(self, node: int) -> bool:
        """Return True if ``node`` is one of this die's s points."""
        return node in self._s_set

    def has_l_point(self, node: int) -> bool:
        """Return True if ``node`` is one of this die's l points."""
        return node in self._l_set


@dataclass
class Path:
    """A routed connection from an s point to an l point across dies.

    ``m_l`` holds the l point used for relaying on each intermediate die.
    """

    s_point: int
    l_point: int
    die_seq: list[int] = field(default_factory=list)
    m_l: list[int] = field(default_factory=list)