# lemin/paths.py
"""
Path enumerator
- every simple start -> end path, depth first
- siblings explored in order of manhattan(room, end) / (1 + degree), ascending
- the end room is never extended past

Exhaustive on purpose: the count of simple paths is exponential in dense
colonies and there is no depth or time cutoff, since a cutoff would change
which paths get scored and therefore the move log.
"""
from typing import Iterator, List, Set
import logging
import networkx as nx

from lemin.model import Colony, Path

logger = logging.getLogger(__name__)


def manhattan(colony: Colony, a: str, b: str) -> int:
    ax, ay = colony.coord(a)
    bx, by = colony.coord(b)
    return abs(ax - bx) + abs(ay - by)


def neighbor_rank(colony: Colony, name: str) -> float:
    """Lower is explored first: close to the end room, many tunnels."""
    return manhattan(colony, name, colony.end) / (1 + colony.degree(name))


def ranked_neighbors(colony: Colony, current: str, visited: Set[str]) -> List[str]:
    candidates = [n for n in colony.neighbors(current) if n not in visited]
    # sorted() is stable: equal ranks keep tunnel declaration order
    return sorted(candidates, key=lambda n: neighbor_rank(colony, n))


def iter_paths(colony: Colony) -> Iterator[Path]:
    """Yield simple paths in discovery order.

    Each stack frame owns its path prefix; the visited set of a frame is the
    prefix itself, so popping a frame releases its rooms for sibling branches.
    """
    start, end = colony.start, colony.end
    stack = [((start,), iter(ranked_neighbors(colony, start, {start})))]
    while stack:
        prefix, branches = stack[-1]
        nxt = next(branches, None)
        if nxt is None:
            stack.pop()
            continue
        path = prefix + (nxt,)
        if nxt == end:
            yield path
            continue
        stack.append((path, iter(ranked_neighbors(colony, nxt, set(path)))))


def find_paths(colony: Colony) -> List[Path]:
    """All simple start -> end paths; empty when the two rooms are disconnected."""
    if not nx.has_path(colony.graph, colony.start, colony.end):
        logger.warning("No path between %s and %s", colony.start, colony.end)
        return []
    paths = list(iter_paths(colony))
    logger.info("Enumerated %d paths", len(paths))
    return paths
