import pytest

from dieroute.allocator import PathAllocator
from dieroute.models import Die, Path


def _relay_network():
    """Die0 reaches Die1 only through Die2, each link holding one connection."""
    dies = [Die([1], []), Die([], [2]), Die([], [3])]
    capacity = [
        [0, 0, 1],
        [0, 0, 0],
        [0, 1, 0],
    ]
    return PathAllocator(dies, capacity)


def _chain(length):
    dies = [Die([i], [100 + i]) for i in range(length)]
    capacity = [[0] * length for _ in range(length)]
    for i in range(length - 1):
        capacity[i][i + 1] = 5
    return PathAllocator(dies, capacity)


def test_rejects_mismatched_capacity():
    with pytest.raises(ValueError):
        PathAllocator([Die(), Die()], [[0, 1]])


def test_find_die_locates_points():
    allocator = _relay_network()
    assert allocator.find_die(1, True) == 0
    assert allocator.find_die(2, False) == 1
    assert allocator.find_die(3, False) == 2
    assert allocator.find_die(2, True) is None
    assert allocator.find_die(99, False) is None


def test_find_paths_routes_through_relay():
    allocator = _relay_network()
    assert allocator.find_paths(0, 1) == [[0, 2, 1]]


def test_find_paths_stops_at_max_hops():
    allocator = _chain(4)
    paths = allocator.find_paths(0, 3, 2)
    assert all(len(p) <= 2 for p in paths)
    assert paths == [[0, 1]]


def test_find_paths_results_start_at_source_and_have_no_loops():
    allocator = _chain(5)
    for path in allocator.find_paths(0, 4, 10):
        assert path[0] == 0
        assert len(set(path)) == len(path)


def test_find_paths_is_sorted_and_capped():
    n = 10
    dies = [Die() for _ in range(n)]
    capacity = [[0 if i == j else 1 for j in range(n)] for i in range(n)]
    allocator = PathAllocator(dies, capacity)
    paths = allocator.find_paths(0, n - 1, n)
    assert len(paths) == 1000
    lengths = [len(p) for p in paths]
    assert lengths == sorted(lengths)


def test_find_paths_cache_returns_independent_copies():
    allocator = _relay_network()
    first = allocator.find_paths(0, 1)
    first[0].append(42)
    first.clear()
    assert allocator.find_paths(0, 1) == [[0, 2, 1]]


def test_use_path_consumes_capacity():
    allocator = _relay_network()
    assert allocator.is_path_available([0, 2, 1])
    allocator.use_path([0, 2, 1])
    assert not allocator.is_path_available([0, 2, 1])
    usage = allocator.get_usage()
    assert usage[0][2] == 1
    assert usage[2][1] == 1
    assert usage[0][1] == 0


def test_single_die_path_is_always_available():
    allocator = _relay_network()
    assert allocator.is_path_available([0])


def test_select_intermediate_l():
    allocator = PathAllocator([Die([], [4, 5])], [[0]])
    assert allocator.select_intermediate_l(0, []) == 4
    assert allocator.select_intermediate_l(0, [4]) == 5
    assert allocator.select_intermediate_l(0, [4, 5]) is None


def test_allocate_single_path_records_relay():
    allocator = _relay_network()
    assert allocator.allocate_single_path(1, 2)
    assert allocator.paths == [Path(1, 2, [0, 2, 1], [3])]


def test_allocate_single_path_fails_when_capacity_exhausted():
    allocator = _relay_network()
    assert allocator.allocate_single_path(1, 2)
    assert not allocator.allocate_single_path(1, 2)
    assert len(allocator.paths) == 1


def test_allocate_single_path_fails_without_relay_point():
    dies = [Die([1], []), Die([], [2]), Die([], [])]
    capacity = [[0, 0, 1], [0, 0, 0], [0, 1, 0]]
    allocator = PathAllocator(dies, capacity)
    assert not allocator.allocate_single_path(1, 2)
    assert allocator.get_usage() == [[0] * 3 for _ in range(3)]


def test_allocate_single_path_unknown_points():
    allocator = _relay_network()
    assert not allocator.allocate_single_path(99, 2)
    assert not allocator.allocate_single_path(1, 99)
    assert allocator.paths == []


def test_allocate_single_path_same_die_succeeds_without_path():
    allocator = PathAllocator([Die([1], [2])], [[0]])
    assert allocator.allocate_single_path(1, 2)
    assert allocator.paths == []


def test_allocate_all_paths(capsys):
    allocator = _relay_network()
    paths = allocator.allocate_all_paths()
    out = capsys.readouterr().out
    assert allocator.total_pairs == 2
    assert allocator.successful_pairs == 1
    assert paths == [Path(1, 2, [0, 2, 1], [3])]
    assert "2 paths need alloting" in out
    assert " Die0 -> Die1 (1 s , 1 l )" in out
    assert "successful allocation: 1/2 (50%)" in out


def test_allocate_all_paths_never_exceeds_capacity(capsys):
    allocator = _chain(4)
    allocator.allocate_all_paths()
    capsys.readouterr()
    usage = allocator.get_usage()
    for i in range(4):
        for j in range(4):
            assert usage[i][j] <= allocator.capacity[i][j]
    for path in allocator.paths:
        assert len(path.m_l) == len(path.die_seq) - 2


def test_get_usage_returns_copy():
    allocator = _relay_network()
    usage = allocator.get_usage()
    usage[0][2] = 7
    assert allocator.get_usage()[0][2] == 0


def test_print_statistics(capsys):
    allocator = _relay_network()
    allocator.use_path([0, 2])
    allocator.print_statistics()
    out = capsys.readouterr().out
    assert "Die0: 1 s , 0 l " in out
    assert "Die0->Die2: 1/1 (100%)" in out
    assert "Die2->Die1: 0/1 (0%)" in out
    assert "usage present: 1/2 (50%)" in out